"""Text preparation applied before input is split into lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

LOGGER = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"


@dataclass(slots=True)
class PreparedText:
    """Outcome of the preparation stage."""

    text: str
    steps: list[str] = field(default_factory=list)


def _strip_byte_order_mark(value: str) -> tuple[str, bool]:
    if value.startswith(BYTE_ORDER_MARK):
        return value[len(BYTE_ORDER_MARK) :], True
    return value, False


def _normalize_newlines(value: str) -> tuple[str, bool]:
    if "\r" not in value:
        return value, False
    return value.replace("\r\n", "\n").replace("\r", "\n"), True


def prepare_text(value: str | None, *, strip_bom: bool = True) -> PreparedText:
    """Prepare raw input for line splitting.

    Steps, in order:
    1. Coerce ``None`` to an empty string
    2. Strip a leading byte-order mark (when ``strip_bom`` is set)
    3. Convert ``\\r\\n`` and lone ``\\r`` terminators to ``\\n``

    Line content is never trimmed here; fields are trimmed when split.
    """
    steps: list[str] = []

    if value is None:
        value = ""
    if not isinstance(value, str):  # pragma: no cover - guard against unexpected input
        value = str(value)
        steps.append("coerce_str")

    if strip_bom:
        value, mutated = _strip_byte_order_mark(value)
        if mutated:
            steps.append("strip_bom")

    value, mutated = _normalize_newlines(value)
    if mutated:
        steps.append("normalize_newlines")

    LOGGER.debug("prepared text", extra={"steps": steps, "length": len(value)})
    return PreparedText(text=value, steps=steps)


def split_lines(text: str) -> list[str]:
    """Split prepared text on ``\\n`` like a text reader would.

    A trailing terminator does not produce an extra empty line, and empty
    text produces no lines at all.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
