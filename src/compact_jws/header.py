"""Fixed protected header for HS256 tokens."""

from __future__ import annotations

import json
from typing import Any

from .constants import ALGORITHM
from .encoding import DEFAULT_ENCODING, SegmentEncoding, b64encode


def build_header() -> dict[str, Any]:
    return {"alg": ALGORITHM}


def encoded_header(encoding: SegmentEncoding = DEFAULT_ENCODING) -> str:
    """Return the encoded form of ``{"alg":"HS256"}``.

    The header is rebuilt on every call and is never read back from a token.
    """

    raw = json.dumps(build_header(), separators=(",", ":")).encode("utf-8")
    return b64encode(raw, encoding)


__all__ = ["build_header", "encoded_header"]
