"""Shared constants for compact JWS tokens."""

ALGORITHM = "HS256"
SEPARATOR = "."
SEGMENT_COUNT = 3
SIGNATURE_SIZE = 32
ENV_PREFIX = "JWS_"
