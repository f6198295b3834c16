"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linetable import __version__


class Settings(BaseSettings):
    """Environment-driven configuration with sensible defaults."""

    delimiter: str = Field(default=",", alias="LINETABLE_DELIMITER")
    encoding: str = Field(default="utf-8", alias="LINETABLE_ENCODING")
    strip_bom: bool = Field(default=True, alias="LINETABLE_STRIP_BOM")
    max_input_bytes: int = Field(default=1_048_576, gt=0, alias="LINETABLE_MAX_INPUT_BYTES")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    model_version: str = Field(default=__version__, alias="MODEL_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
