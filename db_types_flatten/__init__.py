"""Database Types Flattener

A Python package for turning the nested `Database` type of generated
database typings into standalone, renamable type declarations.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    FlattenConfig,
    NamingConfig,
    OutputConfig,
    OutputMode,
    ParseError,
    TransformError,
    TransformOptions,
    TypesFlattener,
    ValidationError,
    transform_types,
)

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
