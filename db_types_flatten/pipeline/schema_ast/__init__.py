"""
Schema AST module: parsing type descriptions into a navigable tree.
"""

from __future__ import annotations

from .nodes import Declaration, DeclarationKind, SchemaTree
from .parser import SchemaParser

__all__ = [
    "Declaration",
    "DeclarationKind",
    "SchemaParser",
    "SchemaTree",
]
