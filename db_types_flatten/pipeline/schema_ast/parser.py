"""
TypeScript type description parser.

Phase 1 of the pipeline: parse the source text into a SchemaTree using
tree-sitter and the TypeScript grammar, without any semantic checks.
"""

from __future__ import annotations

import logging

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from ..errors import ParseError
from .nodes import Declaration, DeclarationKind, SchemaTree

logger = logging.getLogger(__name__)


class SchemaParser:
    """Parses TypeScript type descriptions into a SchemaTree."""

    # Statement types that wrap a declaration
    EXPORT_STATEMENT = "export_statement"

    def __init__(self):
        self._parser = Parser(Language(ts_typescript.language_typescript()))

    def parse(self, source_text: str) -> SchemaTree:
        """
        Parse source text into a SchemaTree.

        Args:
            source_text: TypeScript source containing type declarations

        Returns:
            SchemaTree with the top-level declarations in source order

        Raises:
            ParseError: If the text is not syntactically valid
        """
        try:
            source = source_text.encode("utf8")
        except UnicodeEncodeError as e:
            raise ParseError(f"Failed to parse type description: text is not encodable as UTF-8 ({e.reason})") from e

        tree = self._parser.parse(source)

        if tree.root_node.has_error:
            raise self._error_for(tree.root_node, source)

        declarations = tuple(self._collect_declarations(tree.root_node, source))
        logger.debug("Parsed %d top-level declarations", len(declarations))
        return SchemaTree(source=source, tree=tree, declarations=declarations)

    def _collect_declarations(self, root: Node, source: bytes) -> list[Declaration]:
        """Collect top-level declarations, unwrapping `export` statements."""
        declarations = []
        for statement in root.named_children:
            if statement.type == "comment":
                continue

            node = statement
            if statement.type == self.EXPORT_STATEMENT:
                node = statement.child_by_field_name("declaration") or statement

            declarations.append(self._make_declaration(node, statement, source))
        return declarations

    def _make_declaration(self, node: Node, statement: Node, source: bytes) -> Declaration:
        if node.type == "type_alias_declaration":
            kind = DeclarationKind.TYPE_ALIAS
            body = node.child_by_field_name("value")
        elif node.type == "interface_declaration":
            kind = DeclarationKind.INTERFACE
            body = node.child_by_field_name("body")
        else:
            return Declaration(kind=DeclarationKind.OTHER, name=None, node=node, statement=statement)

        name_node = node.child_by_field_name("name")
        name = source[name_node.start_byte : name_node.end_byte].decode("utf8") if name_node else None
        return Declaration(kind=kind, name=name, node=node, statement=statement, body=body)

    def _error_for(self, root: Node, source: bytes) -> ParseError:
        """Build a ParseError pointing at the first syntax error."""
        errors = self._find_errors(root)
        if not errors:
            return ParseError("Failed to parse type description: syntax error")

        first_error = errors[0]
        line = first_error.start_point[0] + 1
        column = first_error.start_point[1] + 1
        if first_error.is_missing:
            detail = f"missing '{first_error.type}'"
        else:
            snippet = source[first_error.start_byte : first_error.end_byte].decode("utf8", errors="replace")
            detail = f"syntax error near '{snippet[:50]}'"
        return ParseError(
            f"Failed to parse type description at line {line}, column {column}: {detail}",
            line=line,
            column=column,
        )

    def _find_errors(self, node: Node) -> list[Node]:
        """Find all ERROR and MISSING nodes in the tree."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        for child in node.children:
            errors.extend(self._find_errors(child))
        return errors
