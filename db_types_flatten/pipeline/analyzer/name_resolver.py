"""
Name resolver for declaration and member nodes.

Extracts the declared identifier of a node, normalising quoted member
names so that `"my_table": {...}` and `my_table: {...}` resolve alike.
"""

from __future__ import annotations

from tree_sitter import Node

from ..schema_ast.nodes import SchemaTree

# Nodes whose identifier lives in their "name" field
NAMED_NODE_TYPES = {
    "property_signature",
    "method_signature",
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
    "class_declaration",
}

# Nodes that are identifiers themselves
IDENTIFIER_NODE_TYPES = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "type_identifier",
    "number",
}

QUOTES = {'"', "'", "`"}


class NameResolver:
    """Resolves the declared identifier of nodes in one SchemaTree."""

    def __init__(self, tree: SchemaTree):
        """
        Initialize the resolver.

        Args:
            tree: The tree the resolved nodes belong to
        """
        self.tree = tree

    def resolve(self, node: Node | None) -> str | None:
        """
        Get the declared identifier of a node.

        Args:
            node: A declaration, member or identifier node

        Returns:
            The identifier, or None if the node carries no nameable identifier
        """
        if node is None:
            return None

        if node.type in NAMED_NODE_TYPES:
            return self.resolve(node.child_by_field_name("name"))

        if node.type in IDENTIFIER_NODE_TYPES:
            return self.tree.text(node)

        if node.type == "string":
            return self._unquote(self.tree.text(node))

        return None

    def _unquote(self, text: str) -> str:
        if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
            return text[1:-1]
        return text
