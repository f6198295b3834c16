"""Errors raised by line table parsing and lookups."""

from __future__ import annotations


class LineTableError(Exception):
    """Base error for this package."""

    def __init__(self, message: str, *, label: str | None = None) -> None:
        super().__init__(message)
        self.label = label


class NotFoundError(LineTableError, LookupError):
    """Raised when no line carries the requested label."""


class InvalidValueError(LineTableError, ValueError):
    """Raised when a required value is missing or blank."""


class FormatError(LineTableError, ValueError):
    """Raised when a value cannot be parsed as the requested number type."""


class InvalidArgumentError(LineTableError, ValueError):
    """Raised for a blank label or an unusable delimiter."""


class InputTooLargeError(LineTableError):
    """Raised when an input file exceeds the configured size limit."""
