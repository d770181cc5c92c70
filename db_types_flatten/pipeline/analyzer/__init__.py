"""
Analyzer module.

Contains name resolution, entity extraction, and reference rewriting.
"""

from __future__ import annotations

from .extractor import EntityExtractor
from .ir_nodes import (
    EntityCategory,
    Extraction,
    FormattedEntity,
    OperationKind,
    RawEntity,
    ReferenceTable,
)
from .name_resolver import NameResolver
from .reference_resolver import ReferenceRewriter

__all__ = [
    "EntityCategory",
    "OperationKind",
    "RawEntity",
    "FormattedEntity",
    "ReferenceTable",
    "Extraction",
    "NameResolver",
    "EntityExtractor",
    "ReferenceRewriter",
]
