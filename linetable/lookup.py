"""Dispatch label lookups to the typed table accessors."""

from __future__ import annotations

from enum import Enum

import structlog

from linetable import metrics
from linetable.errors import LineTableError, NotFoundError
from linetable.table import Line, LineTable

LOGGER = structlog.get_logger(__name__)

LookupValue = str | int | float | bool | Line | None


class ValueKind(str, Enum):
    """Value types a label can be looked up as."""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    LINE = "line"


def lookup(table: LineTable, label: str, kind: ValueKind | str = ValueKind.STRING) -> LookupValue:
    """Look ``label`` up in ``table`` as ``kind``.

    ``ValueKind.LINE`` returns ``None`` for an absent label; every other kind
    raises the accessor's error.
    """
    kind = ValueKind(kind)
    try:
        if kind is ValueKind.STRING:
            value: LookupValue = table.required_string(label)
        elif kind is ValueKind.INT:
            value = table.required_int(label)
        elif kind is ValueKind.DOUBLE:
            value = table.required_double(label)
        elif kind is ValueKind.BOOL:
            value = table.required_boolean_or_default(label)
        else:
            value = table.line_by_label(label)
    except NotFoundError:
        metrics.observe_lookup(kind=kind.value, outcome="not_found")
        raise
    except LineTableError as exc:
        metrics.observe_lookup(kind=kind.value, outcome="invalid")
        LOGGER.debug("lookup.failed", label=label, kind=kind.value, error=str(exc))
        raise

    outcome = "not_found" if value is None else "ok"
    metrics.observe_lookup(kind=kind.value, outcome=outcome)
    return value
