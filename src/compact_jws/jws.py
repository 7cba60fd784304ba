"""Boundary operations: issue and verify compact HS256 tokens."""

from __future__ import annotations

from typing import Any, Optional, TypeVar, Union, overload

from . import codec, header, payload as payload_serializer, signer
from .encoding import DEFAULT_ENCODING, SegmentEncoding
from .errors import JWSError, redact_token
from .logging import get_logger, logging_enabled
from .signer import Key

T = TypeVar("T")

logger = get_logger(__name__)


def encode(key: Key, payload: Any, *, encoding: SegmentEncoding = DEFAULT_ENCODING) -> str:
    """Serialize and sign ``payload``, returning ``header.payload.signature``.

    ``payload`` is a mapping with string keys, a pydantic model or a
    dataclass. The payload is signed, not encrypted: anyone holding the token
    can read it.
    """

    encoding = SegmentEncoding(encoding)
    signer.coerce_key(key)
    header_segment = header.encoded_header(encoding)
    payload_segment = payload_serializer.serialize(payload, encoding)
    signature_segment = signer.sign(key, header_segment, payload_segment, encoding)
    token = codec.assemble(header_segment, payload_segment, signature_segment)
    if logging_enabled():
        logger.debug("jws.encoded", encoding=encoding.value, token=redact_token(token))
    return token


@overload
def decode(
    key: Key,
    token: Union[str, bytes],
    shape: None = None,
    *,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> dict[str, Any]: ...


@overload
def decode(
    key: Key,
    token: Union[str, bytes],
    shape: type[T],
    *,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> T: ...


def decode(
    key: Key,
    token: Union[str, bytes],
    shape: Optional[Any] = None,
    *,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> Any:
    """Verify ``token`` with ``key`` and return its payload as ``shape``.

    Without a shape the payload comes back as a ``dict``. Any failure raises a
    :class:`~compact_jws.errors.JWSError` subclass and nothing is returned.
    """

    encoding = SegmentEncoding(encoding)
    try:
        _, payload_segment, _ = codec.parse(key, token, encoding)
        value = payload_serializer.deserialize(payload_segment, shape, encoding)
    except JWSError as exc:
        if logging_enabled():
            logger.info(
                "jws.decode_failed",
                code=exc.code.value,
                encoding=encoding.value,
                token=redact_token(token),
            )
        raise
    if logging_enabled():
        logger.debug("jws.decoded", encoding=encoding.value, token=redact_token(token))
    return value


__all__ = ["decode", "encode"]
