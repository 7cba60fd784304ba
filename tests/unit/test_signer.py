from __future__ import annotations

import base64
import hashlib
import hmac

import pytest

from compact_jws.encoding import SegmentEncoding
from compact_jws.errors import DecodeError, InvalidKeyError, SignatureMismatchError
from compact_jws.signer import coerce_key, sign, signing_input, verify

HEADER = "eyJhbGciOiJIUzI1NiJ9"
PAYLOAD = "eyJzdWIiOjIzfQ"


def test_signing_input_joins_segments_with_a_single_dot() -> None:
    assert signing_input(HEADER, PAYLOAD) == f"{HEADER}.{PAYLOAD}".encode("ascii")


def test_sign_matches_hmac_sha256_over_signing_input() -> None:
    digest = hmac.new(b"abcd", f"{HEADER}.{PAYLOAD}".encode(), hashlib.sha256).digest()

    assert sign(b"abcd", HEADER, PAYLOAD, SegmentEncoding.STANDARD) == (
        base64.b64encode(digest).decode("ascii")
    )
    assert sign(b"abcd", HEADER, PAYLOAD) == (
        base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    )


def test_sign_is_deterministic_and_accepts_text_keys() -> None:
    assert sign("abcd", HEADER, PAYLOAD) == sign(b"abcd", HEADER, PAYLOAD)
    assert sign(bytearray(b"abcd"), HEADER, PAYLOAD) == sign(b"abcd", HEADER, PAYLOAD)


def test_tag_depends_on_key_and_input() -> None:
    baseline = sign(b"abcd", HEADER, PAYLOAD)
    assert sign(b"efgh", HEADER, PAYLOAD) != baseline
    assert sign(b"abcd", HEADER, PAYLOAD + "A") != baseline


@pytest.mark.parametrize("key", ["", b"", bytearray()])
def test_empty_key_is_rejected_before_hashing(
    key: object, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _fail(*_args, **_kwargs):
        raise AssertionError("hmac must not be invoked for an empty key")

    monkeypatch.setattr("compact_jws.signer.hmac.new", _fail)
    with pytest.raises(InvalidKeyError):
        sign(key, HEADER, PAYLOAD)  # type: ignore[arg-type]


def test_non_string_key_is_rejected() -> None:
    with pytest.raises(InvalidKeyError):
        coerce_key(1234)  # type: ignore[arg-type]


def test_verify_accepts_matching_signature() -> None:
    verify(b"abcd", HEADER, PAYLOAD, sign(b"abcd", HEADER, PAYLOAD))


def test_verify_rejects_other_key() -> None:
    with pytest.raises(SignatureMismatchError):
        verify(b"efgh", HEADER, PAYLOAD, sign(b"abcd", HEADER, PAYLOAD))


def test_verify_rejects_truncated_tag() -> None:
    signature = sign(b"abcd", HEADER, PAYLOAD)
    with pytest.raises((SignatureMismatchError, DecodeError)):
        verify(b"abcd", HEADER, PAYLOAD, signature[:-4])


def test_verify_compares_raw_tags_in_constant_time(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[bytes, bytes]] = []
    original = hmac.compare_digest

    def _recording(a, b):
        calls.append((a, b))
        return original(a, b)

    monkeypatch.setattr("compact_jws.signer.hmac.compare_digest", _recording)
    verify(b"abcd", HEADER, PAYLOAD, sign(b"abcd", HEADER, PAYLOAD))

    assert len(calls) == 1
    expected, received = calls[0]
    assert isinstance(expected, bytes) and len(expected) == 32
    assert expected == received


def test_verify_rejects_well_formed_tag_of_wrong_length() -> None:
    short = base64.urlsafe_b64encode(b"\x00" * 31).rstrip(b"=").decode("ascii")
    with pytest.raises(SignatureMismatchError):
        verify(b"abcd", HEADER, PAYLOAD, short)
