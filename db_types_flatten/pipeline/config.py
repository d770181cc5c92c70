"""
Configuration for the command line and config files.

The core transform takes TransformOptions; this module holds the
serialisable settings that the command line turns into those options.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from ..utils import name_formatter, suffixed_name_formatter
from .options import TransformOptions


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


def _field_names(cls) -> set[str]:
    return {f.name for f in fields(cls)}


def _known_fields(cls, section: object, key: str) -> dict:
    """Keep the entries of a config section that name a field of `cls`."""
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{key}' must be an object, got {type(section).__name__}")
    names = _field_names(cls)
    return {k: v for k, v in section.items() if k in names}


def _output_mode(mode: object) -> OutputMode:
    try:
        return OutputMode(mode)
    except ValueError:
        choices = ", ".join(m.value for m in OutputMode)
        raise ValueError(f"Unknown output mode {mode!r}, expected one of {choices}") from None


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to re-parse the output before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class NamingConfig:
    """Naming style per entity category ("preserve", "pascal" or "camel")."""

    enum: str = "preserve"
    composite_type: str = "preserve"
    table_or_view: str = "preserve"
    function: str = "preserve"


@dataclass
class FlattenConfig:
    """Configuration options for flattening."""

    # Schema to extract
    schema: str = "public"

    # Operations to emit besides Row
    relationships: bool = False
    inserts: bool = False
    updates: bool = False
    deletes: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = True

    naming: NamingConfig = field(default_factory=NamingConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> FlattenConfig:
        """
        Create a config from a dictionary. Unknown keys are ignored.

        Raises:
            ValueError: If a section is not a mapping or the output mode is unknown
        """
        if not isinstance(d, dict):
            raise ValueError(f"Config must be a JSON object, got {type(d).__name__}")

        config = FlattenConfig()
        for k, v in d.items():
            if k == "naming":
                config.naming = NamingConfig(**_known_fields(NamingConfig, v, k))
            elif k == "output":
                values = _known_fields(OutputConfig, v, k)
                if "mode" in values:
                    values["mode"] = _output_mode(values["mode"])
                config.output = OutputConfig(**values)
            elif k in _field_names(FlattenConfig):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "schema": self.schema,
            "relationships": self.relationships,
            "inserts": self.inserts,
            "updates": self.updates,
            "deletes": self.deletes,
            "add_generation_comment": self.add_generation_comment,
            "naming": {
                "enum": self.naming.enum,
                "composite_type": self.naming.composite_type,
                "table_or_view": self.naming.table_or_view,
                "function": self.naming.function,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }

    def to_options(self, source_text: str) -> TransformOptions:
        """
        Build transform options for a source text.

        Raises:
            ValueError: If a naming style is unknown
            ValidationError: If a setting has the wrong type
        """
        return TransformOptions.create(
            source_text=source_text,
            schema=self.schema,
            enum_formatter=name_formatter(self.naming.enum),
            composite_type_formatter=name_formatter(self.naming.composite_type),
            table_or_view_formatter=suffixed_name_formatter(self.naming.table_or_view),
            function_formatter=suffixed_name_formatter(self.naming.function),
            relationships=self.relationships,
            inserts=self.inserts,
            updates=self.updates,
            deletes=self.deletes,
        )
