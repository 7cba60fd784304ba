"""HMAC-SHA256 signing of the ``header.payload`` signing input."""

from __future__ import annotations

import hashlib
import hmac
from typing import Union

from .constants import SEPARATOR, SIGNATURE_SIZE
from .encoding import DEFAULT_ENCODING, SegmentEncoding, b64decode, b64encode
from .errors import InvalidKeyError, SignatureMismatchError

Key = Union[bytes, bytearray, memoryview, str]


def coerce_key(key: Key) -> bytes:
    """Return the key as bytes, rejecting empty or non-string keys."""

    if isinstance(key, str):
        raw = key.encode("utf-8")
    elif isinstance(key, (bytes, bytearray, memoryview)):
        raw = bytes(key)
    else:
        raise InvalidKeyError("jws: key must be bytes or str", details={"type": type(key).__name__})
    if not raw:
        raise InvalidKeyError("jws: key can not be empty")
    return raw


def signing_input(header_segment: str, payload_segment: str) -> bytes:
    return f"{header_segment}{SEPARATOR}{payload_segment}".encode("ascii")


def compute_tag(key: Key, header_segment: str, payload_segment: str) -> bytes:
    raw_key = coerce_key(key)
    return hmac.new(raw_key, signing_input(header_segment, payload_segment), hashlib.sha256).digest()


def sign(
    key: Key,
    header_segment: str,
    payload_segment: str,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> str:
    """Return the encoded HMAC-SHA256 tag over ``header_segment.payload_segment``."""

    return b64encode(compute_tag(key, header_segment, payload_segment), encoding)


def verify(
    key: Key,
    header_segment: str,
    payload_segment: str,
    signature_segment: str,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> None:
    """Check a received signature segment against a freshly computed tag.

    Raw tags are compared with :func:`hmac.compare_digest`, never the encoded text.
    """

    expected = compute_tag(key, header_segment, payload_segment)
    received = b64decode(signature_segment, encoding)
    if len(received) != SIGNATURE_SIZE or not hmac.compare_digest(expected, received):
        raise SignatureMismatchError("jws: signature authentication failed")


__all__ = ["Key", "coerce_key", "compute_tag", "sign", "signing_input", "verify"]
