"""
Pipeline - flattening a Database type description into standalone types.

This module provides a multi-phase architecture:

1. Phase 1 (Parser): Parse TypeScript source into a SchemaTree (tree-sitter)
2. Phase 2 (Extractor): Locate the schema, collect and name its entities
3. Phase 3 (Rewriter): Replace qualified Database paths with formatted names
4. Phase 4 (Assembler): Drop unsupported declarations and join the rest
5. Phase 5 (Writer): Optional atomic write of the result
"""

from __future__ import annotations

from .config import FlattenConfig, NamingConfig, OutputConfig, OutputMode
from .errors import ParseError, TransformError, ValidationError
from .generator import TypesFlattener, transform_types
from .options import TransformOptions
from .output import AtomicWriter

__all__ = [
    "transform_types",
    "TypesFlattener",
    "TransformOptions",
    "FlattenConfig",
    "NamingConfig",
    "OutputConfig",
    "OutputMode",
    "TransformError",
    "ValidationError",
    "ParseError",
    "AtomicWriter",
]
