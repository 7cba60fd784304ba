"""Compact ``header.payload.signature`` serialization."""

from __future__ import annotations

from typing import Tuple, Union

from .constants import SEGMENT_COUNT, SEPARATOR
from .encoding import DEFAULT_ENCODING, SegmentEncoding
from .errors import StructuralError
from .signer import Key, coerce_key, verify

Segments = Tuple[str, str, str]

_INCOMPLETE = (
    "jws: incomplete signature: does not contain 3 parts, header, payload and signed signature"
)


def assemble(header_segment: str, payload_segment: str, signature_segment: str) -> str:
    return SEPARATOR.join((header_segment, payload_segment, signature_segment))


def split(token: Union[str, bytes]) -> Segments:
    """Split a compact token into its three segments without verifying it."""

    if isinstance(token, (bytes, bytearray)):
        try:
            token = bytes(token).decode("ascii")
        except UnicodeDecodeError as exc:
            raise StructuralError("jws: token is not ASCII text") from exc
    if not isinstance(token, str):
        raise StructuralError(
            "jws: token must be a string", details={"type": type(token).__name__}
        )
    if not token.isascii():
        raise StructuralError("jws: token is not ASCII text")

    parts = token.split(SEPARATOR)
    if len(parts) != SEGMENT_COUNT:
        raise StructuralError(_INCOMPLETE, details={"parts": str(len(parts))})
    if not all(parts):
        raise StructuralError("jws: token contains an empty segment")
    header_segment, payload_segment, signature_segment = parts
    return header_segment, payload_segment, signature_segment


def parse(
    key: Key,
    token: Union[str, bytes],
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> Segments:
    """Split ``token`` and verify its signature with ``key``.

    Checks run in a fixed order: key, structure, then signature. The payload
    segment is returned still encoded and is only trusted once this returns.
    """

    coerce_key(key)
    header_segment, payload_segment, signature_segment = split(token)
    verify(key, header_segment, payload_segment, signature_segment, encoding)
    return header_segment, payload_segment, signature_segment


__all__ = ["Segments", "assemble", "parse", "split"]
