"""
Transform options and formatter policy.

All options are validated once, at call entry, before any parsing begins.
Formatter defaults are resolved here rather than threaded through the walk.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .analyzer.ir_nodes import EntityCategory, OperationKind
from .errors import ValidationError


def identity_formatter(name: str) -> str:
    """Default enum and composite type formatter."""
    return name


def concat_formatter(name: str, suffix: str) -> str:
    """Default table-or-view and function formatter."""
    return f"{name}{suffix}"


def _check_arity(formatter: Callable, arity: int) -> None:
    """Check that a formatter can be called with `arity` positional strings."""
    try:
        signature = inspect.signature(formatter)
    except (TypeError, ValueError):
        # Some builtins expose no signature; accept them as-is
        return
    try:
        signature.bind(*(["name"] * arity))
    except TypeError as e:
        plural = "argument" if arity == 1 else "arguments"
        raise ValueError(f"formatter must accept exactly {arity} positional {plural} ({e})") from e


class TransformOptions(BaseModel):
    """Options for a single transform call."""

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    source_text: str = Field(..., description="Type description to flatten")
    schema_name: str = Field("public", alias="schema", description="Schema to extract")
    enum_formatter: Callable[[str], str] = Field(identity_formatter, description="Names enums")
    composite_type_formatter: Callable[[str], str] = Field(identity_formatter, description="Names composite types")
    function_formatter: Callable[[str, str], str] = Field(concat_formatter, description="Names function groupings")
    table_or_view_formatter: Callable[[str, str], str] = Field(concat_formatter, description="Names table operations")
    relationships: bool = Field(False, description="Emit Relationships declarations")
    updates: bool = Field(False, description="Emit Update declarations")
    inserts: bool = Field(False, description="Emit Insert declarations")
    deletes: bool = Field(False, description="Emit Delete declarations")

    @field_validator("enum_formatter", "composite_type_formatter")
    @classmethod
    def validate_single_name_formatter(cls, v: Callable) -> Callable:
        _check_arity(v, 1)
        return v

    @field_validator("function_formatter", "table_or_view_formatter")
    @classmethod
    def validate_pair_formatter(cls, v: Callable) -> Callable:
        _check_arity(v, 2)
        return v

    @classmethod
    def create(cls, **kwargs) -> TransformOptions:
        """
        Build options, raising the package's ValidationError on bad input.

        Raises:
            ValidationError: Listing every invalid option
        """
        try:
            return cls.model_validate(kwargs)
        except PydanticValidationError as e:
            problems = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors())
            raise ValidationError(f"Invalid transform options: {problems}") from e

    def includes(self, operation: str) -> bool:
        """Whether a table or view operation is emitted under these options."""
        match OperationKind.from_name(operation):
            case OperationKind.RELATIONSHIPS:
                return self.relationships
            case OperationKind.INSERT:
                return self.inserts
            case OperationKind.UPDATE:
                return self.updates
            case OperationKind.DELETE:
                return self.deletes
            case _:
                return True

    def format_name(self, category: EntityCategory, *args: str) -> str:
        """
        Compute the output identifier of an entity.

        Args:
            category: Entity category, selecting the formatter
            *args: Entity name, followed by the operation or grouping name
                for tables, views and functions

        Returns:
            The formatted name

        Raises:
            ValidationError: If the formatter does not return a string
        """
        match category:
            case EntityCategory.ENUM:
                formatter, label = self.enum_formatter, "enum_formatter"
            case EntityCategory.COMPOSITE_TYPE:
                formatter, label = self.composite_type_formatter, "composite_type_formatter"
            case EntityCategory.FUNCTION:
                formatter, label = self.function_formatter, "function_formatter"
            case _:
                formatter, label = self.table_or_view_formatter, "table_or_view_formatter"

        formatted_name = formatter(*args)
        if not isinstance(formatted_name, str):
            raise ValidationError(f"{label}{args!r} returned {type(formatted_name).__name__}, expected str")
        return formatted_name
