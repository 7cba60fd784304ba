from __future__ import annotations

import pytest

from compact_jws.encoding import SegmentEncoding, b64decode, b64encode
from compact_jws.errors import DecodeError


def test_urlsafe_is_unpadded_and_url_safe() -> None:
    data = b"\xfb\xff\xfe"  # encodes to characters outside the url-safe alphabet in standard base64

    assert b64encode(data, SegmentEncoding.STANDARD) == "+//+"
    assert b64encode(data, SegmentEncoding.URLSAFE) == "-__-"
    assert b64encode(b"ab", SegmentEncoding.URLSAFE) == "YWI"
    assert b64encode(b"ab", SegmentEncoding.STANDARD) == "YWI="


@pytest.mark.parametrize("encoding", list(SegmentEncoding))
def test_decode_inverts_encode(encoding: SegmentEncoding) -> None:
    data = bytes(range(256))
    assert b64decode(b64encode(data, encoding), encoding) == data


def test_encoding_accepts_plain_string_values() -> None:
    assert b64encode(b"ab", "standard") == "YWI="  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "segment",
    ["YWI=", "+//+", "YW I", "YWI\n", "Y"],
)
def test_urlsafe_rejects_invalid_text(segment: str) -> None:
    with pytest.raises(DecodeError):
        b64decode(segment, SegmentEncoding.URLSAFE)


@pytest.mark.parametrize(
    "segment",
    ["YWI", "-__-", "YW=I", "YWI=\n", "Y==="],
)
def test_standard_rejects_invalid_text(segment: str) -> None:
    with pytest.raises(DecodeError):
        b64decode(segment, SegmentEncoding.STANDARD)


def test_non_canonical_trailing_bits_are_rejected() -> None:
    # "YWI" and "YWJ" differ only in bits discarded by the decoder.
    assert b64decode("YWI", SegmentEncoding.URLSAFE) == b"ab"
    with pytest.raises(DecodeError):
        b64decode("YWJ", SegmentEncoding.URLSAFE)
