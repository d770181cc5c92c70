"""
Exceptions raised by the flattening pipeline.
"""

from __future__ import annotations


class TransformError(Exception):
    """Base class for all errors raised by db_types_flatten."""

    pass


class ValidationError(TransformError, ValueError):
    """Raised when transform options do not have their documented shape.

    This can happen when:
    - A formatter is not callable or accepts the wrong number of arguments
    - A formatter returns something other than a string
    - A flag is not a real boolean
    - The source text or schema name is not a string
    """

    pass


class ParseError(TransformError):
    """Raised when the source text is not a syntactically valid type description."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column
