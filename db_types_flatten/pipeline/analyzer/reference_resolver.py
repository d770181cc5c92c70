"""
Reference rewriter for qualified Database paths.

Replaces `Database["<schema>"]["Enums"]["<name>"]` style paths (both quoting
conventions) with the formatted names recorded during extraction.
"""

from __future__ import annotations

import logging

from .ir_nodes import FormattedEntity, ReferenceTable

logger = logging.getLogger(__name__)


class ReferenceRewriter:
    """Rewrites qualified references across every extracted entity."""

    def __init__(self, references: ReferenceTable):
        """
        Initialize the rewriter.

        Args:
            references: Complete reference table of the walked schema
        """
        self.references = references
        self._substitutions = references.substitutions()

    def rewrite_text(self, text: str) -> str:
        """
        Replace every known qualified path in a body.

        Args:
            text: Body text, possibly containing qualified paths

        Returns:
            Text with each qualified path replaced by its formatted name
        """
        for path, formatted_name in self._substitutions:
            if path in text:
                text = text.replace(path, formatted_name)
        return text

    def rewrite(self, entities: list[FormattedEntity]) -> list[FormattedEntity]:
        """
        Rewrite the bodies of all entities.

        Args:
            entities: Entities in emission order

        Returns:
            New entities with rewritten bodies, in the same order
        """
        logger.debug("Rewriting %d entities with %d references", len(entities), len(self.references))
        return [entity.with_body(self.rewrite_text(entity.body_text)) for entity in entities]
