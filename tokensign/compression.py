from __future__ import annotations

import zlib

from tokensign.errors import DecompressionError


MARKER = b"."


def is_compressed(data: bytes) -> bool:
    return data[:1] == MARKER


def compress(data: bytes) -> bytes:
    """Return the zlib form prefixed with MARKER, or data itself if that is not smaller."""
    packed = zlib.compress(data)
    if len(MARKER) + len(packed) < len(data):
        return MARKER + packed
    return data


def decompress(data: bytes) -> bytes:
    if not is_compressed(data):
        return data
    try:
        return zlib.decompress(data[len(MARKER):])
    except zlib.error as e:
        raise DecompressionError("Invalid compressed payload") from e
