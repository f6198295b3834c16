"""FastAPI application exposing label lookups over posted text."""

from __future__ import annotations

import logging
from typing import Annotated, Any

import structlog
import structlog.stdlib
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from pydantic import BaseModel, Field

from linetable import metrics
from linetable.errors import LineTableError, NotFoundError
from linetable.loader import load_text
from linetable.lookup import ValueKind, lookup
from linetable.settings import Settings, get_settings
from linetable.table import Line

SettingsDep = Annotated[Settings, Depends(get_settings)]

_request_logger = structlog.get_logger("requests")


def configure_logging(log_level: str) -> None:
    """Render structlog events as JSON lines through stdlib logging at ``log_level``."""
    numeric_level = logging.getLevelName(log_level.upper())
    if isinstance(numeric_level, str):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        # Route through stdlib logging so output lands on stderr, not stdout.
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class LineModel(BaseModel):
    index: int
    raw: str
    fields: list[str]

    @classmethod
    def from_line(cls, line: Line) -> "LineModel":
        return cls(index=line.index, raw=line.raw, fields=list(line.fields))


class LookupRequestModel(BaseModel):
    text: str
    label: str
    kind: ValueKind = Field(default=ValueKind.STRING)
    delimiter: str | None = Field(default=None, min_length=1, max_length=1)


class LookupResponseModel(BaseModel):
    label: str
    kind: ValueKind
    value: str | int | float | bool | LineModel | None
    line_count: int
    version: str


class LinesRequestModel(BaseModel):
    text: str
    delimiter: str | None = Field(default=None, min_length=1, max_length=1)
    contains: str | None = None


class LinesResponseModel(BaseModel):
    lines: list[LineModel]
    last_line_number: int


def _error_status(exc: LineTableError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return 422


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Line Table", version=settings.model_version)
    app.dependency_overrides[get_settings] = lambda: settings

    @app.middleware("http")
    async def enforce_limits(request: Request, call_next):
        if request.url.path in {"/lookup", "/lines"}:
            limit = settings.max_input_bytes
            content_length = request.headers.get("content-length")
            if content_length:
                try:
                    size = int(content_length)
                    if size > limit:
                        _request_logger.warning(
                            "request_rejected",
                            path=str(request.url.path),
                            reason="body_too_large",
                            size=size,
                            limit=limit,
                        )
                        return Response(
                            content="request too large",
                            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                            media_type="text/plain",
                        )
                except ValueError:
                    pass  # Ignore malformed header and fall through
        return await call_next(request)

    @app.get("/healthz", response_class=Response)
    async def healthz() -> Response:
        return Response(content="ok\n", media_type="text/plain")

    @app.post("/lookup", response_model=LookupResponseModel)
    def lookup_endpoint(request: LookupRequestModel, settings: SettingsDep) -> LookupResponseModel:
        try:
            table = load_text(request.text, delimiter=request.delimiter, settings=settings)
            value: Any = lookup(table, request.label, request.kind)
        except LineTableError as exc:
            _request_logger.info(
                "lookup_failed",
                label=request.label,
                kind=request.kind.value,
                error=type(exc).__name__,
            )
            raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from None

        if isinstance(value, Line):
            value = LineModel.from_line(value)
        return LookupResponseModel(
            label=request.label,
            kind=request.kind,
            value=value,
            line_count=len(table),
            version=settings.model_version,
        )

    @app.post("/lines", response_model=LinesResponseModel)
    def lines_endpoint(request: LinesRequestModel, settings: SettingsDep) -> LinesResponseModel:
        try:
            table = load_text(request.text, delimiter=request.delimiter, settings=settings)
        except LineTableError as exc:
            raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from None

        if request.contains is None:
            selected = list(table.lines)
        else:
            wanted = request.contains.lower()
            selected = table.all_lines_by_filter(
                lambda line: any(field.lower() == wanted for field in line.fields)
            )
        return LinesResponseModel(
            lines=[LineModel.from_line(line) for line in selected],
            last_line_number=table.last_line_number(),
        )

    @app.get("/metrics")
    async def metrics_endpoint(settings: SettingsDep) -> Response:
        if not settings.metrics_enabled:
            raise HTTPException(status_code=404, detail="metrics disabled")
        payload, content_type = metrics.render_metrics()
        return Response(content=payload, media_type=content_type)

    return app
