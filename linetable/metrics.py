"""Prometheus metrics helpers."""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

LOOKUPS_TOTAL = Counter(
    "linetable_lookups_total",
    "Number of label lookups grouped by value kind and outcome",
    labelnames=("kind", "outcome"),
    registry=REGISTRY,
)

LOAD_LATENCY = Histogram(
    "linetable_load_seconds",
    "Time spent preparing and parsing input text into a table",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
    registry=REGISTRY,
)

LINES_PARSED = Counter(
    "linetable_lines_parsed_total",
    "Number of input lines parsed into tables",
    registry=REGISTRY,
)


def observe_load(*, latency_ms: float, line_count: int) -> None:
    LOAD_LATENCY.observe(latency_ms / 1000.0)
    LINES_PARSED.inc(line_count)


def observe_lookup(*, kind: str, outcome: str) -> None:
    LOOKUPS_TOTAL.labels(kind=kind, outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    payload = generate_latest(REGISTRY)
    return payload, CONTENT_TYPE_LATEST
