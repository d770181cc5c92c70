"""
Flattening pipeline entry points.

Wires the phases together: parse, extract, rewrite references, assemble.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .analyzer import EntityExtractor, ReferenceRewriter
from .assembler import Assembler
from .options import TransformOptions
from .schema_ast import SchemaParser

logger = logging.getLogger(__name__)


class TypesFlattener:
    """Flattens a Database type description into standalone declarations.

    Usage:
        options = TransformOptions.create(source_text=text, schema="public")
        output = TypesFlattener(options).generate()
    """

    def __init__(self, options: TransformOptions):
        """
        Initialize the flattener.

        Args:
            options: Validated transform options
        """
        self.options = options
        self.parser = SchemaParser()
        self.extractor = EntityExtractor(options)
        self.assembler = Assembler()

    def generate(self) -> str:
        """
        Run the full pipeline.

        Returns:
            The joined declarations, or "" if the Database root or the schema is absent

        Raises:
            ParseError: If the source text is not syntactically valid
            ValidationError: If a formatter returns a non-string
        """
        # Phase 1: Parse source text into a SchemaTree
        tree = self.parser.parse(self.options.source_text)

        # Phase 2: Extract and name entities
        extraction = self.extractor.extract(tree)

        # Phase 3: Rewrite qualified references, once every target is known
        entities = ReferenceRewriter(extraction.references).rewrite(extraction.entities)

        # Phase 4: Filter and join
        output = self.assembler.assemble(entities)
        logger.debug("Generated %d entities for schema %r", len(entities), self.options.schema_name)
        return output


def transform_types(
    source_text: str,
    schema: str = "public",
    enum_formatter: Callable[[str], str] | None = None,
    composite_type_formatter: Callable[[str], str] | None = None,
    function_formatter: Callable[[str, str], str] | None = None,
    table_or_view_formatter: Callable[[str, str], str] | None = None,
    relationships: bool = False,
    updates: bool = False,
    inserts: bool = False,
    deletes: bool = False,
) -> str:
    """
    Flatten the selected schema of a Database type description.

    Args:
        source_text: TypeScript source containing a `Database` type
        schema: Name of the schema to extract
        enum_formatter: Names enums, `(name) -> str`; identity by default
        composite_type_formatter: Names composite types, `(name) -> str`; identity by default
        function_formatter: Names function groupings, `(name, grouping) -> str`;
            concatenation by default
        table_or_view_formatter: Names table and view operations, `(name, operation) -> str`;
            concatenation by default
        relationships: Emit `Relationships` declarations
        updates: Emit `Update` declarations
        inserts: Emit `Insert` declarations
        deletes: Emit `Delete` declarations

    Returns:
        The joined declarations, or "" if the Database root or the schema is absent

    Raises:
        ValidationError: If any option has the wrong shape (before parsing)
        ParseError: If the source text is not syntactically valid
    """
    formatters = {
        "enum_formatter": enum_formatter,
        "composite_type_formatter": composite_type_formatter,
        "function_formatter": function_formatter,
        "table_or_view_formatter": table_or_view_formatter,
    }
    options = TransformOptions.create(
        source_text=source_text,
        schema=schema,
        relationships=relationships,
        updates=updates,
        inserts=inserts,
        deletes=deletes,
        **{key: value for key, value in formatters.items() if value is not None},
    )
    return TypesFlattener(options).generate()
