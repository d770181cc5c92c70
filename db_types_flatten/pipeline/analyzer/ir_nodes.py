"""
IR (Intermediate Representation) node definitions.

These nodes represent the entities extracted from a Database description,
named by the formatter policy and ready for reference rewriting and
assembly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class EntityCategory(str, Enum):
    """Category of an extracted entity."""

    TABLE = "Table"
    VIEW = "View"
    ENUM = "Enum"
    COMPOSITE_TYPE = "CompositeType"
    FUNCTION = "Function"

    @property
    def group(self) -> str:
        """Name of the schema member grouping this category (e.g. "Enums")."""
        return f"{self.value}s"


class OperationKind(str, Enum):
    """Row-shape variant of a table or view."""

    ROW = "Row"
    INSERT = "Insert"
    UPDATE = "Update"
    DELETE = "Delete"
    RELATIONSHIPS = "Relationships"

    @classmethod
    def from_name(cls, name: str) -> OperationKind | None:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class RawEntity:
    """An entity as it appeared in the source.

    Attributes:
        category: Entity category, None for declarations copied verbatim
        name: Original entity name
        body_text: Verbatim text of the type body
        operation: Operation name for tables and views, argument grouping for functions
        verbatim: Whether body_text is a complete declaration to emit unchanged
    """

    category: EntityCategory | None
    name: str
    body_text: str
    operation: str | None = None
    verbatim: bool = False


@dataclass(frozen=True)
class FormattedEntity(RawEntity):
    """An entity with its output identifier."""

    formatted_name: str = ""

    @classmethod
    def from_raw(cls, raw: RawEntity, formatted_name: str) -> FormattedEntity:
        return cls(
            category=raw.category,
            name=raw.name,
            body_text=raw.body_text,
            operation=raw.operation,
            verbatim=raw.verbatim,
            formatted_name=formatted_name,
        )

    def with_body(self, body_text: str) -> FormattedEntity:
        return replace(self, body_text=body_text)


@dataclass
class ReferenceTable:
    """Formatted names of referenceable entities of one schema.

    Keys are (category, original name); later records overwrite earlier ones.
    """

    schema: str = "public"
    entries: dict[tuple[EntityCategory, str], str] = field(default_factory=dict)

    def record(self, category: EntityCategory, name: str, formatted_name: str) -> None:
        self.entries[(category, name)] = formatted_name

    def reference_paths(self, category: EntityCategory, name: str) -> tuple[str, str]:
        """Both quoting spellings of the qualified path to an entity."""
        group = category.group
        return (
            f'Database["{self.schema}"]["{group}"]["{name}"]',
            f"Database['{self.schema}']['{group}']['{name}']",
        )

    def substitutions(self) -> list[tuple[str, str]]:
        """List (qualified path, formatted name) pairs for every entry."""
        pairs = []
        for (category, name), formatted_name in self.entries.items():
            for path in self.reference_paths(category, name):
                pairs.append((path, formatted_name))
        return pairs

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class Extraction:
    """Result of walking a SchemaTree.

    Attributes:
        entities: Formatted entities in emission order
        references: Formatted names of the schema's enums and composite types
        database_found: Whether a Database declaration was found
        schema_found: Whether the selected schema was found in it
    """

    entities: list[FormattedEntity] = field(default_factory=list)
    references: ReferenceTable = field(default_factory=ReferenceTable)
    database_found: bool = False
    schema_found: bool = False
