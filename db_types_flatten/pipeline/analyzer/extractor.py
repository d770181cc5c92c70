"""
Entity extractor that walks a SchemaTree.

Phase 2 of the pipeline: locate the Database declaration and the selected
schema inside it, then collect and name the entities of each member group.
Each nesting level is handled by its own method.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from tree_sitter import Node

from ..schema_ast.nodes import Declaration, DeclarationKind, SchemaTree
from .ir_nodes import EntityCategory, Extraction, FormattedEntity, OperationKind, RawEntity, ReferenceTable
from .name_resolver import NameResolver

if TYPE_CHECKING:
    from ..options import TransformOptions

logger = logging.getLogger(__name__)

# Schema member groups in emission order; Tables and Views share a slot
GROUP_ORDER = (
    ("Tables", "Views"),
    ("Enums",),
    ("CompositeTypes",),
    ("Functions",),
)

# Type nodes that name another type rather than spelling out a structure
TYPE_REFERENCE_NODES = {"type_identifier", "generic_type", "nested_type_identifier"}

# Bodies accepted for enums: a union of literals, or a single literal
ENUM_BODY_NODES = {"union_type", "literal_type"}

OBJECT_TYPE = "object_type"
TUPLE_TYPE = "tuple_type"


class EntityExtractor:
    """Collects formatted entities from a parsed type description."""

    DATABASE_NAME = "Database"
    JSON_NAME = "Json"

    def __init__(self, options: TransformOptions):
        """
        Initialize the extractor.

        Args:
            options: Validated transform options
        """
        self.options = options

        # Will be set during extraction
        self.tree: SchemaTree | None = None
        self.names: NameResolver | None = None

    def extract(self, tree: SchemaTree) -> Extraction:
        """
        Walk the tree and collect every entity of the selected schema.

        Args:
            tree: The parsed type description

        Returns:
            Extraction with entities in emission order and the reference table
        """
        self.tree = tree
        self.names = NameResolver(tree)

        extraction = Extraction(references=ReferenceTable(schema=self.options.schema_name))

        for declaration in tree.declarations:
            if declaration.name == self.DATABASE_NAME:
                database_type = self._database_type(declaration)
                if database_type is None:
                    continue
                extraction.database_found = True
                schema_type = self._find_schema(database_type)
                if schema_type is None:
                    continue
                extraction.schema_found = True
                extraction.entities.extend(self._visit_schema(schema_type, extraction.references))

            elif declaration.name == self.JSON_NAME and declaration.kind == DeclarationKind.TYPE_ALIAS:
                extraction.entities.append(self._verbatim(declaration))

        if not extraction.database_found:
            logger.debug("No %s declaration found", self.DATABASE_NAME)
        elif not extraction.schema_found:
            logger.debug("Schema %r not found in %s", self.options.schema_name, self.DATABASE_NAME)

        return extraction

    def _database_type(self, declaration: Declaration) -> Node | None:
        """Get the node holding the schemas of a Database declaration."""
        if declaration.body is None:
            return None
        if declaration.kind == DeclarationKind.INTERFACE:
            return declaration.body
        if declaration.kind == DeclarationKind.TYPE_ALIAS and declaration.body.type == OBJECT_TYPE:
            return declaration.body
        return None

    def _find_schema(self, database_type: Node) -> Node | None:
        for member in self._members(database_type):
            if self.names.resolve(member) != self.options.schema_name:
                continue
            schema_type = self._member_type(member)
            if schema_type is not None and schema_type.type == OBJECT_TYPE:
                return schema_type
        return None

    def _visit_schema(self, schema_type: Node, references: ReferenceTable) -> list[FormattedEntity]:
        """Visit the member groups of a schema in emission order."""
        groups = []
        for member in self._members(schema_type):
            group_type = self._member_type(member)
            if group_type is not None and group_type.type == OBJECT_TYPE:
                groups.append((self.names.resolve(member), group_type))

        entities = []
        for accepted in GROUP_ORDER:
            for group_name, group_type in groups:
                if group_name in accepted:
                    entities.extend(self._visit_group(group_name, group_type, references))
        return entities

    def _visit_group(self, group_name: str, group_type: Node, references: ReferenceTable) -> Iterator[FormattedEntity]:
        match group_name:
            case "Tables":
                return self._visit_table_like(EntityCategory.TABLE, group_type)
            case "Views":
                return self._visit_table_like(EntityCategory.VIEW, group_type)
            case "Enums":
                return self._visit_named_types(EntityCategory.ENUM, group_type, ENUM_BODY_NODES, references)
            case "CompositeTypes":
                return self._visit_named_types(EntityCategory.COMPOSITE_TYPE, group_type, {OBJECT_TYPE}, references)
            case "Functions":
                return self._visit_functions(group_type)
            case _:
                return iter(())

    def _visit_table_like(self, category: EntityCategory, group_type: Node) -> Iterator[FormattedEntity]:
        for table_name, table_type in self._named_members(group_type):
            if table_type.type != OBJECT_TYPE:
                continue
            for operation, body in self._named_members(table_type):
                if not self.options.includes(operation):
                    continue
                if self._accepts_operation_body(operation, body):
                    yield self._entity(category, table_name, body, operation=operation)

    def _accepts_operation_body(self, operation: str, body: Node) -> bool:
        if body.type == OBJECT_TYPE:
            return True
        # Relationships are encoded as a tuple of foreign key descriptions
        return operation == OperationKind.RELATIONSHIPS.value and body.type == TUPLE_TYPE

    def _visit_named_types(
        self,
        category: EntityCategory,
        group_type: Node,
        accepted_bodies: set[str],
        references: ReferenceTable,
    ) -> Iterator[FormattedEntity]:
        """Visit enums or composite types, recording their formatted names."""
        for name, body in self._named_members(group_type):
            if body.type not in accepted_bodies:
                continue
            entity = self._entity(category, name, body)
            references.record(category, name, entity.formatted_name)
            yield entity

    def _visit_functions(self, group_type: Node) -> Iterator[FormattedEntity]:
        for function_name, function_type in self._named_members(group_type):
            if function_type.type != OBJECT_TYPE:
                continue
            for grouping, body in self._named_members(function_type):
                if body.type in TYPE_REFERENCE_NODES:
                    yield self._entity(EntityCategory.FUNCTION, function_name, body, operation=grouping)

    def _entity(self, category: EntityCategory, name: str, body: Node, operation: str | None = None) -> FormattedEntity:
        raw = RawEntity(category=category, name=name, body_text=self.tree.text(body), operation=operation)
        if operation is None:
            formatted_name = self.options.format_name(category, name)
        else:
            formatted_name = self.options.format_name(category, name, operation)
        return FormattedEntity.from_raw(raw, formatted_name)

    def _verbatim(self, declaration: Declaration) -> FormattedEntity:
        """Copy a top-level declaration unchanged, keeping its own name."""
        return FormattedEntity(
            category=None,
            name=declaration.name,
            body_text=self.tree.text(declaration.statement).rstrip(),
            verbatim=True,
            formatted_name=declaration.name,
        )

    def _members(self, node: Node) -> list[Node]:
        """Get the property signatures of an object type or interface body."""
        return [child for child in node.named_children if child.type == "property_signature"]

    def _member_type(self, member: Node) -> Node | None:
        """Get the type node of a property signature (`name: <type>`)."""
        annotation = member.child_by_field_name("type")
        if annotation is None:
            return None
        for child in annotation.named_children:
            if child.type != "comment":
                return child
        return None

    def _named_members(self, node: Node) -> Iterator[tuple[str, Node]]:
        """Yield (name, type node) for every nameable, typed member."""
        for member in self._members(node):
            name = self.names.resolve(member)
            member_type = self._member_type(member)
            if name is None or member_type is None:
                continue
            yield name, member_type
