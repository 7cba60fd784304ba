"""Canonical JSON serialization of token payloads."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, TypeVar, overload

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .encoding import DEFAULT_ENCODING, SegmentEncoding, b64decode, b64encode
from .errors import SerializationError

T = TypeVar("T")


def canonical_bytes(payload: Any) -> bytes:
    """Serialize ``payload`` to compact, key-sorted UTF-8 JSON.

    Accepts mappings with string keys, pydantic models and dataclasses. The
    top-level value must serialize to a JSON object.
    """

    _check_keys(payload)
    try:
        document = to_jsonable_python(payload, by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(
            "jws: payload cannot be serialized to JSON",
            details={"type": type(payload).__name__},
        ) from exc

    if not isinstance(document, dict):
        raise SerializationError(
            "jws: payload must serialize to a JSON object",
            details={"type": type(payload).__name__},
        )

    try:
        text = json.dumps(
            document,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError("jws: payload cannot be serialized to JSON") from exc
    return text.encode("utf-8")


def serialize(payload: Any, encoding: SegmentEncoding = DEFAULT_ENCODING) -> str:
    return b64encode(canonical_bytes(payload), encoding)


@overload
def deserialize(
    segment: str, shape: None = None, encoding: SegmentEncoding = DEFAULT_ENCODING
) -> dict[str, Any]: ...


@overload
def deserialize(
    segment: str, shape: type[T], encoding: SegmentEncoding = DEFAULT_ENCODING
) -> T: ...


def deserialize(
    segment: str,
    shape: Optional[Any] = None,
    encoding: SegmentEncoding = DEFAULT_ENCODING,
) -> Any:
    """Decode a payload segment and validate it into ``shape``.

    Raises ``DecodeError`` for invalid base64 and ``SerializationError`` when
    the bytes are not a JSON object or do not fit the requested shape.
    """

    raw = b64decode(segment, encoding)
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SerializationError("jws: payload is not valid JSON") from exc

    if not isinstance(document, dict):
        raise SerializationError("jws: payload is not a JSON object")

    if shape is None or shape is dict:
        return document
    try:
        return TypeAdapter(shape).validate_python(document)
    except ValidationError as exc:
        raise SerializationError(
            "jws: payload does not match the expected shape",
            details={
                "shape": getattr(shape, "__name__", repr(shape)),
                "errors": str(exc.error_count()),
            },
        ) from exc


def _check_keys(value: Any) -> None:
    """Reject non-string mapping keys anywhere in the caller's value.

    Runs on the original value: JSON conversion would stringify ``1`` or ``(1, 2)``.
    """

    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    "jws: payload keys must be strings", details={"key": type(key).__name__}
                )
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


__all__ = ["canonical_bytes", "deserialize", "serialize"]
