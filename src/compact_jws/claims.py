"""Session token claims with a fixed lifetime."""

from __future__ import annotations

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .config import ConfigError, JWSConfig


class TokenClaims(BaseModel):
    """Registered claims carried by a session token (all Unix seconds)."""

    model_config = ConfigDict(frozen=True)

    sub: int
    iat: int
    exp: int

    def is_expired(self, now: Optional[int] = None) -> bool:
        current = int(time.time()) if now is None else now
        return current >= self.exp


def new_token(
    user_id: int, *, expiration_minutes: int, now: Optional[int] = None
) -> TokenClaims:
    if expiration_minutes < 1:
        raise ValueError("expiration_minutes must be at least 1")
    issued_at = int(time.time()) if now is None else now
    return TokenClaims(sub=user_id, iat=issued_at, exp=issued_at + expiration_minutes * 60)


def new_token_from_config(
    user_id: int, config: JWSConfig, *, now: Optional[int] = None
) -> TokenClaims:
    minutes = config.token_expiration_minutes
    if minutes is None:
        raise ConfigError(
            "token expiration: JWS_TOKEN_EXPIRATION (or tokenExpiration), in minutes, not set"
        )
    return new_token(user_id, expiration_minutes=minutes, now=now)


__all__ = ["TokenClaims", "new_token", "new_token_from_config"]
