"""
Assembler that renders the output catalog.

Last phase of the pipeline: drop declarations that cannot be represented,
render the rest through the declaration template and join them.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from .analyzer.ir_nodes import FormattedEntity

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent.resolve().absolute() / "templates"

# Declarations containing this pattern describe numeric-keyed dictionaries
UNSUPPORTED_PATTERN = "Record<number"

STATEMENT_SEPARATOR = ";\n"


class Assembler:
    """Joins formatted entities into one text."""

    def __init__(self):
        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        with open(TEMPLATES_DIR / "typescript" / "declaration.ts.jinja2", encoding="utf-8") as f:
            self.declaration = self.jinja_env.from_string(f.read())

    def render(self, entity: FormattedEntity) -> str:
        """Render one entity as a declaration."""
        return self.declaration.render(entity=entity)

    def is_supported(self, declaration: str) -> bool:
        return UNSUPPORTED_PATTERN not in declaration

    def assemble(self, entities: list[FormattedEntity]) -> str:
        """
        Render and join entities, preserving their order.

        Args:
            entities: Rewritten entities in emission order

        Returns:
            Declarations joined by the statement separator, or "" if none remain
        """
        declarations = []
        for entity in entities:
            declaration = self.render(entity)
            if not self.is_supported(declaration):
                logger.debug("Dropping %s: numeric-keyed record", entity.formatted_name)
                continue
            declarations.append(declaration)
        return STATEMENT_SEPARATOR.join(declarations)
