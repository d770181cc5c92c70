"""
Parsed representation of a type description.

Wraps the tree-sitter syntax tree with the source bytes it was built from,
so that any node can be turned back into its verbatim text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node, Tree


class DeclarationKind(str, Enum):
    """Kind of top-level declaration."""

    TYPE_ALIAS = "type_alias"  # type Name = ...
    INTERFACE = "interface"  # interface Name { ... }
    OTHER = "other"  # Anything else (imports, consts, functions, ...)


@dataclass(frozen=True)
class Declaration:
    """A top-level statement of the source text.

    Attributes:
        kind: Declaration kind
        name: Declared identifier, None for anonymous statements
        node: The declaration node (export wrapper removed)
        statement: The full statement node, including any `export` keyword
        body: Type alias value or interface body, if any
    """

    kind: DeclarationKind
    name: str | None
    node: Node
    statement: Node
    body: Node | None = None


@dataclass(frozen=True)
class SchemaTree:
    """Root of the parsed type description."""

    source: bytes
    tree: Tree
    declarations: tuple[Declaration, ...] = field(default_factory=tuple)

    def text(self, node: Node) -> str:
        """Get the verbatim source text for a node."""
        return self.source[node.start_byte : node.end_byte].decode("utf8")
