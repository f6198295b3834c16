"""Build line tables from text blobs and files."""

from __future__ import annotations

from pathlib import Path
from time import perf_counter

import structlog

from linetable import metrics, normalize
from linetable.errors import InputTooLargeError
from linetable.settings import Settings, get_settings
from linetable.table import LineTable

LOGGER = structlog.get_logger(__name__)


def load_text(
    text: str | None,
    *,
    delimiter: str | None = None,
    settings: Settings | None = None,
    source: str = "<text>",
) -> LineTable:
    """Prepare ``text`` and parse it into a :class:`LineTable`.

    ``delimiter`` falls back to the configured one.
    """
    settings = settings or get_settings()
    start = perf_counter()

    prepared = normalize.prepare_text(text, strip_bom=settings.strip_bom)
    table = LineTable(prepared.text, delimiter=delimiter or settings.delimiter)

    latency_ms = (perf_counter() - start) * 1000
    metrics.observe_load(latency_ms=latency_ms, line_count=len(table))
    LOGGER.info(
        "table.loaded",
        source=source,
        lines=len(table),
        delimiter=table.delimiter,
        steps=prepared.steps,
        latency_ms=round(latency_ms, 3),
    )
    return table


def load_file(
    path: str | Path,
    *,
    delimiter: str | None = None,
    encoding: str | None = None,
    settings: Settings | None = None,
) -> LineTable:
    """Read ``path`` and parse it into a :class:`LineTable`.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        InputTooLargeError: if the file exceeds ``max_input_bytes``.
    """
    settings = settings or get_settings()
    file_path = Path(path)

    size = file_path.stat().st_size
    if size > settings.max_input_bytes:
        LOGGER.warning(
            "table.rejected",
            source=str(file_path),
            reason="input_too_large",
            size=size,
            limit=settings.max_input_bytes,
        )
        raise InputTooLargeError(
            f"{file_path} is {size} bytes, limit is {settings.max_input_bytes}"
        )

    text = file_path.read_text(encoding=encoding or settings.encoding)
    return load_text(text, delimiter=delimiter, settings=settings, source=str(file_path))
