"""Configuration for the command-line tooling.

The codec itself never reads configuration; keys and encodings are always
passed explicitly.
"""

from __future__ import annotations

import os
from logging import getLevelName
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import ENV_PREFIX
from .encoding import DEFAULT_ENCODING, SegmentEncoding
from .logging import DEFAULT_LOG_LEVEL

LEGACY_EXPIRATION_ENV = "tokenExpiration"


class ConfigError(RuntimeError):
    """Raised when configuration is invalid or incomplete."""


class JWSConfig(BaseModel):
    """Validated configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root log level")
    segment_encoding: SegmentEncoding = Field(
        default=DEFAULT_ENCODING, description="Segment encoding (urlsafe or standard)"
    )
    secret: Optional[str] = Field(default=None, description="Shared HS256 secret for the CLI")
    token_expiration_minutes: Optional[int] = Field(
        default=None, ge=1, description="Lifetime (minutes) of tokens issued by the CLI"
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        candidate = value.upper()
        resolved = getLevelName(candidate)
        if isinstance(resolved, int):
            return candidate
        raise ValueError(f"Unsupported log level '{value}'")

    @field_validator("segment_encoding", mode="before")
    @classmethod
    def _normalise_encoding(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("secret")
    @classmethod
    def _blank_secret_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls) -> JWSConfig:
        """Load configuration from environment variables (respecting .env)."""
        load_dotenv()
        try:
            raw: dict[str, Any] = {
                "log_level": os.getenv(
                    f"{ENV_PREFIX}LOG_LEVEL", cls.model_fields["log_level"].default
                ),
                "segment_encoding": os.getenv(
                    f"{ENV_PREFIX}SEGMENT_ENCODING",
                    cls.model_fields["segment_encoding"].default,
                ),
                "secret": os.getenv(f"{ENV_PREFIX}SECRET"),
                "token_expiration_minutes": cls._env_to_optional_int(
                    f"{ENV_PREFIX}TOKEN_EXPIRATION", LEGACY_EXPIRATION_ENV
                ),
            }
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError("Invalid compact-jws configuration") from exc

    @staticmethod
    def _env_to_optional_int(*names: str) -> Optional[int]:
        for name in names:
            raw = os.getenv(name)
            if raw is None or not raw.strip():
                continue
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(f"Environment variable {name} must be an integer") from exc
        return None


def load_config() -> JWSConfig:
    """Convenience helper to load configuration with error propagation."""
    return JWSConfig.from_env()
