"""Base64 segment encodings shared by the header, payload and signature."""

from __future__ import annotations

import base64
import binascii
import re
from enum import Enum

from .errors import DecodeError

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")
_STANDARD_ALPHABET = re.compile(r"[A-Za-z0-9+/]*={0,2}")


class SegmentEncoding(str, Enum):
    """Text encoding applied to every segment of a token.

    ``URLSAFE`` is the RFC 7515 form (base64url, no padding). ``STANDARD``
    is padded base64 with ``+`` and ``/``; it matches tokens issued by older
    deployments and must be chosen explicitly.
    """

    URLSAFE = "urlsafe"
    STANDARD = "standard"


DEFAULT_ENCODING = SegmentEncoding.URLSAFE


def b64encode(data: bytes, encoding: SegmentEncoding = DEFAULT_ENCODING) -> str:
    encoding = SegmentEncoding(encoding)
    if encoding is SegmentEncoding.STANDARD:
        return base64.b64encode(data).decode("ascii")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64decode(segment: str, encoding: SegmentEncoding = DEFAULT_ENCODING) -> bytes:
    """Decode one segment, rejecting anything that would not re-encode identically."""

    encoding = SegmentEncoding(encoding)
    if encoding is SegmentEncoding.STANDARD:
        if not _STANDARD_ALPHABET.fullmatch(segment):
            raise DecodeError("jws: segment is not valid base64 text")
        padded = segment
    else:
        if not _URLSAFE_ALPHABET.fullmatch(segment):
            raise DecodeError("jws: segment is not valid base64url text")
        padded = segment + "=" * (-len(segment) % 4)

    try:
        data = base64.b64decode(padded, altchars=_altchars(encoding), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("jws: segment is not valid base64 text") from exc

    # Non-zero trailing bits decode silently; a segment is only accepted in its canonical form.
    if b64encode(data, encoding) != segment:
        raise DecodeError("jws: segment is not canonically encoded")
    return data


def _altchars(encoding: SegmentEncoding) -> bytes | None:
    if encoding is SegmentEncoding.STANDARD:
        return None
    return b"-_"


__all__ = ["DEFAULT_ENCODING", "SegmentEncoding", "b64decode", "b64encode"]
