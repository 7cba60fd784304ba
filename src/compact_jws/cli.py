"""Command-line interface for issuing and verifying compact tokens."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from .claims import new_token, new_token_from_config
from .config import ConfigError, JWSConfig, load_config
from .encoding import SegmentEncoding
from .errors import JWSError, redact_sensitive
from .jws import decode, encode
from .logging import setup_logging


class CLIError(RuntimeError):
    """Raised for invalid command-line input."""


def _resolve_key(args: argparse.Namespace, config: JWSConfig) -> str:
    key = args.key if args.key is not None else config.secret
    if not key:
        raise CLIError("a key is required: pass --key or set JWS_SECRET")
    return key


def _resolve_encoding(args: argparse.Namespace, config: JWSConfig) -> SegmentEncoding:
    if args.encoding is not None:
        return SegmentEncoding(args.encoding)
    return config.segment_encoding


def _cmd_encode(args: argparse.Namespace, config: JWSConfig) -> int:
    try:
        payload: Any = json.loads(args.payload)
    except json.JSONDecodeError as exc:
        raise CLIError(f"--payload is not valid JSON: {exc.msg}") from exc
    token = encode(
        _resolve_key(args, config), payload, encoding=_resolve_encoding(args, config)
    )
    print(token)
    return 0


def _cmd_decode(args: argparse.Namespace, config: JWSConfig) -> int:
    value = decode(
        _resolve_key(args, config), args.token.strip(), encoding=_resolve_encoding(args, config)
    )
    indent = 2 if args.pretty else None
    json.dump(value, sys.stdout, indent=indent, sort_keys=True)
    sys.stdout.write("\n")
    return 0


def _cmd_issue(args: argparse.Namespace, config: JWSConfig) -> int:
    if args.expires_minutes is not None:
        claims = new_token(args.user_id, expiration_minutes=args.expires_minutes)
    else:
        claims = new_token_from_config(args.user_id, config)
    token = encode(_resolve_key(args, config), claims, encoding=_resolve_encoding(args, config))
    print(token)
    return 0


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--key", default=None, help="Shared secret (defaults to JWS_SECRET)")
    parser.add_argument(
        "--encoding",
        choices=[item.value for item in SegmentEncoding],
        default=None,
        help="Segment encoding (defaults to JWS_SEGMENT_ENCODING or urlsafe)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue and verify HS256 compact JWS tokens")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Sign a JSON object payload")
    encode_parser.add_argument("--payload", required=True, help="JSON object to sign")
    _add_common(encode_parser)
    encode_parser.set_defaults(func=_cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Verify a token and print its payload")
    decode_parser.add_argument("token", help="Compact token to verify")
    decode_parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    _add_common(decode_parser)
    decode_parser.set_defaults(func=_cmd_decode)

    issue_parser = subparsers.add_parser("issue", help="Issue a session token for a user")
    issue_parser.add_argument("--user-id", type=int, required=True, help="Subject (user id)")
    issue_parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to JWS_TOKEN_EXPIRATION)",
    )
    _add_common(issue_parser)
    issue_parser.set_defaults(func=_cmd_issue)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config()
    except ConfigError as exc:
        parser.error(redact_sensitive(str(exc)))
    setup_logging(config.log_level)
    try:
        return args.func(args, config)
    except (JWSError, ConfigError, CLIError, ValueError) as exc:
        parser.error(redact_sensitive(str(exc)))
    return 1


if __name__ == "__main__":  # pragma: no cover - manual execution path
    raise SystemExit(main())
