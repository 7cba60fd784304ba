"""Global test fixtures and environment setup."""

from __future__ import annotations

import pytest
import structlog

_ENV_VARS = (
    "JWS_LOG_LEVEL",
    "JWS_SEGMENT_ENCODING",
    "JWS_SECRET",
    "JWS_TOKEN_EXPIRATION",
    "tokenExpiration",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()
