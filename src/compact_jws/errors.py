"""Error types raised while encoding or verifying compact tokens."""

from __future__ import annotations

import re
from enum import Enum

from .constants import SEPARATOR

_SENSITIVE_PATTERN = re.compile(r"(?i)(token|secret|key)=([^\s]+)")


class JWSErrorCode(str, Enum):
    INVALID_KEY = "InvalidKey"
    SERIALIZATION = "Serialization"
    DECODE = "Decode"
    STRUCTURAL = "Structural"
    SIGNATURE_MISMATCH = "SignatureMismatch"


class JWSError(ValueError):
    """Base error for token failures.

    Messages and details never carry key material or signature bytes.
    """

    code: JWSErrorCode

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}

    def __str__(self) -> str:
        base = f"{self.code.value}: {self.args[0]}"
        if self.details:
            return f"{base} ({self.details})"
        return base


class InvalidKeyError(JWSError):
    """The signing key is empty or not a byte/text string."""

    code = JWSErrorCode.INVALID_KEY


class SerializationError(JWSError):
    """The payload could not be converted to or from canonical JSON."""

    code = JWSErrorCode.SERIALIZATION


class DecodeError(JWSError):
    """A segment is not valid base64 text."""

    code = JWSErrorCode.DECODE


class StructuralError(JWSError):
    """The token is not three non-empty dot separated segments."""

    code = JWSErrorCode.STRUCTURAL


class SignatureMismatchError(JWSError):
    """The recomputed tag does not match the received one."""

    code = JWSErrorCode.SIGNATURE_MISMATCH


def redact_sensitive(text: str) -> str:
    """Mask obvious secrets in error messages."""
    return _SENSITIVE_PATTERN.sub(lambda m: f"{m.group(1)}=***", text)


def redact_token(token: object) -> str:
    """Return the token with its signature segment masked, for log output."""

    if not isinstance(token, str):
        return f"<{type(token).__name__}>"
    head, sep, _ = token.rpartition(SEPARATOR)
    if not sep:
        return "***"
    return f"{head}{SEPARATOR}***"


__all__ = [
    "DecodeError",
    "InvalidKeyError",
    "JWSError",
    "JWSErrorCode",
    "SerializationError",
    "SignatureMismatchError",
    "StructuralError",
    "redact_sensitive",
    "redact_token",
]
