"""Header formatting settings loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars
prefixed with ``MIME_HEADERS_``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HeaderSettings(BaseSettings):
    """Limits and constants used when rendering header text."""

    model_config = SettingsConfigDict(env_prefix="MIME_HEADERS_")

    boundary_prefix: str = Field(
        default="----sinikael-?=_",
        description="Fixed prefix of every generated multipart boundary",
    )
    continuation_max_length: int = Field(
        default=50,
        gt=0,
        description="Maximum length of a single RFC 2231 parameter segment",
    )
    max_q_word_length: int = Field(
        default=52,
        gt=0,
        description="Maximum encoded-text length of a Q encoded word",
    )
    max_b_word_bytes: int = Field(
        default=39,
        gt=0,
        description="Maximum source bytes packed into one B encoded word",
    )
    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")


@lru_cache(maxsize=1)
def get_settings() -> HeaderSettings:
    """Return the process-wide settings instance."""
    return HeaderSettings()
