"""Compact JSON Web Signature (HS256) encoder and verifier."""

from importlib import metadata

from .encoding import SegmentEncoding
from .errors import (
    DecodeError,
    InvalidKeyError,
    JWSError,
    JWSErrorCode,
    SerializationError,
    SignatureMismatchError,
    StructuralError,
)
from .jws import decode, encode

__all__ = [
    "DecodeError",
    "InvalidKeyError",
    "JWSError",
    "JWSErrorCode",
    "SegmentEncoding",
    "SerializationError",
    "SignatureMismatchError",
    "StructuralError",
    "__version__",
    "decode",
    "encode",
]


try:
    __version__ = metadata.version("compact-jws")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"
