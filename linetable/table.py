"""Delimiter-separated lines with lookups by leading-field label."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from linetable.errors import (
    FormatError,
    InvalidArgumentError,
    InvalidValueError,
    NotFoundError,
)
from linetable.normalize import prepare_text, split_lines

LinePredicate = Callable[["Line"], bool]

_TRUE_TOKEN = "true"
_FALSE_TOKEN = "false"

# ASCII literals only: int() and float() also accept "1_000", non-ASCII digits and "inf".
_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DOUBLE_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity|NaN)",
    re.ASCII | re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class Line:
    """One input line: 1-based index, original text and trimmed fields."""

    index: int
    raw: str
    fields: tuple[str, ...] = ()

    @property
    def label(self) -> str | None:
        return self.fields[0] if self.fields else None

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _parse_bool(value: str) -> bool | None:
    token = value.strip().lower()
    if token == _TRUE_TOKEN:
        return True
    if token == _FALSE_TOKEN:
        return False
    return None


def _parse_int(value: str) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer literal: {value!r}")
    return int(value)


def _parse_double(value: str) -> float:
    if not _DOUBLE_PATTERN.fullmatch(value):
        raise ValueError(f"invalid number literal: {value!r}")
    return float(value)


class LineTable:
    """Immutable table of lines parsed from delimiter-separated text.

    Every line of the input becomes a :class:`Line`, blank lines included, so
    line indexes match the source. Lookups by label compare the first field
    of each line case-insensitively.
    """

    __slots__ = ("_delimiter", "_lines")

    def __init__(self, text: str | None = None, delimiter: str = ",") -> None:
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise InvalidArgumentError(
                f"delimiter must be a single character, got {delimiter!r}"
            )
        self._delimiter = delimiter
        self._lines = self._parse(text)

    def _parse(self, text: str | None) -> tuple[Line, ...]:
        if text is None:
            return ()
        prepared = prepare_text(text, strip_bom=False)
        return tuple(
            Line(index=number, raw=raw, fields=self._split_fields(raw))
            for number, raw in enumerate(split_lines(prepared.text), start=1)
        )

    def _split_fields(self, raw: str) -> tuple[str, ...]:
        if _is_blank(raw):
            return ()
        return tuple(part.strip() for part in raw.split(self._delimiter))

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __repr__(self) -> str:
        return f"LineTable(lines={len(self._lines)}, delimiter={self._delimiter!r})"

    def first_non_blank_line(self) -> Line | None:
        return self.line_by_filter(lambda line: not line.is_blank)

    def line_by_label(self, label: str) -> Line | None:
        """Return the first line whose first field matches ``label``, ignoring case.

        Raises:
            InvalidArgumentError: if ``label`` is blank.
        """
        if _is_blank(label):
            raise InvalidArgumentError("label must not be blank", label=label)
        wanted = label.lower()
        return self.line_by_filter(
            lambda line: bool(line.fields) and line.fields[0].lower() == wanted
        )

    def line_by_filter(self, predicate: LinePredicate) -> Line | None:
        return next((line for line in self._lines if predicate(line)), None)

    def all_lines_by_filter(self, predicate: LinePredicate) -> list[Line]:
        return [line for line in self._lines if predicate(line)]

    def last_line_number(self) -> int:
        return self._lines[-1].index if self._lines else 0

    def required_string(self, label: str) -> str:
        """Return every non-blank value after the label, joined with the delimiter.

        Raises:
            NotFoundError: no line carries ``label``.
            InvalidValueError: the line has no value, or only blank values.
        """
        line = self._required_value_line(label)
        combined = self._delimiter.join(
            part for part in line.fields[1:] if not _is_blank(part)
        )
        if _is_blank(combined):
            raise InvalidValueError(f"required value is empty for {label!r}", label=label)
        return combined

    def required_int(self, label: str) -> int:
        value = self._required_value_line(label).fields[1]
        try:
            return _parse_int(value)
        except ValueError as exc:
            raise FormatError(
                f"value {value!r} for {label!r} is not an integer", label=label
            ) from exc

    def required_double(self, label: str) -> float:
        value = self._required_value_line(label).fields[1]
        try:
            return _parse_double(value)
        except ValueError as exc:
            raise FormatError(
                f"value {value!r} for {label!r} is not a number", label=label
            ) from exc

    def required_boolean_or_default(self, label: str) -> bool:
        """Parse the value after ``label`` as ``true``/``false``.

        An unparsable value yields ``True`` rather than an error; callers
        relying on a strict boolean must validate the raw field themselves.
        """
        parsed = _parse_bool(self._required_value_line(label).fields[1])
        return True if parsed is None else parsed

    def _required_line(self, label: str) -> Line:
        line = self.line_by_label(label)
        if line is None:
            raise NotFoundError(f"no line starting with {label!r} is found", label=label)
        return line

    def _required_value_line(self, label: str) -> Line:
        line = self._required_line(label)
        if len(line.fields) < 2:
            raise InvalidValueError(f"required value is not found for {label!r}", label=label)
        return line
