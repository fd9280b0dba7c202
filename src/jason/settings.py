"""Codec settings with environment variable support.

Settings are read from ``JASON_*`` environment variables and validated
eagerly: invalid values raise :class:`~jason.errors.SettingsError` instead of
surfacing later as odd encoder behaviour.

Examples
--------
>>> from jason.settings import load_settings
>>> settings = load_settings(order="sorted")
>>> settings.strict
True
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jason.errors import SettingsError
from jason.logging import get_logger

__all__ = [
    "CodecSettings",
    "load_settings",
]

logger = get_logger(__name__)


class CodecSettings(BaseSettings):
    """Configuration for the default codec (``JASON_*`` namespace)."""

    model_config = SettingsConfigDict(env_prefix="JASON_", extra="forbid", frozen=True)

    strict: bool = Field(
        default=True,
        description="Reject lax coercions (e.g. '1' into int) when decoding",
    )
    order: Literal["deterministic", "sorted"] | None = Field(
        default=None,
        description="Object key ordering when encoding (None keeps insertion order)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = Field(
        default=None,
        description="Level of the 'jason' logger (None leaves it to the application)",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def load_settings(**overrides: object) -> CodecSettings:
    """Load :class:`CodecSettings` with optional overrides.

    Parameters
    ----------
    **overrides : object
        Field values that take precedence over the environment.

    Returns
    -------
    CodecSettings
        Validated settings.

    Raises
    ------
    SettingsError
        If the environment or the overrides fail validation.
    """
    try:
        return CodecSettings(**overrides)  # type: ignore[arg-type]  # BaseSettings accepts field kwargs
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        logger.exception(
            "Settings validation failed",
            extra={"operation": "load_settings", "status": "error", "error_type": type(exc).__name__},
        )
        raise SettingsError(
            msg,
            cause=exc,
            context={"errors": exc.error_count()},
        ) from exc
