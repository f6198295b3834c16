"""Delimiter-separated labeled lines with typed lookups."""

from linetable.errors import (
    FormatError,
    InputTooLargeError,
    InvalidArgumentError,
    InvalidValueError,
    LineTableError,
    NotFoundError,
)
from linetable.table import Line, LineTable

__version__ = "0.1.0"

__all__ = [
    "FormatError",
    "InputTooLargeError",
    "InvalidArgumentError",
    "InvalidValueError",
    "Line",
    "LineTable",
    "LineTableError",
    "NotFoundError",
    "__version__",
]
