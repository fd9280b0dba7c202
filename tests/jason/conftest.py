"""Shared fixtures for jason tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from jason.codec import Codec, default_codec

if TYPE_CHECKING:
    from collections.abc import Iterator

_ENV_VARS = ("JASON_STRICT", "JASON_ORDER", "JASON_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop ``JASON_*`` variables and rebuild the default codec around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    default_codec.cache_clear()
    yield
    default_codec.cache_clear()


@pytest.fixture
def codec() -> Codec:
    """Codec with default settings."""
    return Codec()
