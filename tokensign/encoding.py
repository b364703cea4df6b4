from __future__ import annotations

import base64
import binascii
import string

from tokensign.errors import BadTimestamp, DecodingError


B62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
_B62_INDEX = {c: i for i, c in enumerate(B62_ALPHABET)}


def b64_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64_decode(data: str | bytes) -> bytes:
    """Decode unpadded base64url, re-adding the padding the encoder dropped."""
    if isinstance(data, str):
        try:
            data = data.encode("ascii")
        except UnicodeEncodeError as e:
            raise DecodingError("Invalid base64 payload") from e
    if b"+" in data or b"/" in data:
        raise DecodingError("Invalid base64 payload")
    if len(data) % 4 == 1:
        raise DecodingError("Invalid base64 payload length")
    pad = b"=" * (-len(data) % 4)
    try:
        return base64.b64decode(data + pad, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodingError("Invalid base64 payload") from e


def b62_encode(number: int) -> str:
    if number < 0:
        raise ValueError("b62_encode() needs a non-negative integer")
    if number == 0:
        return B62_ALPHABET[0]
    digits = []
    while number:
        number, rem = divmod(number, 62)
        digits.append(B62_ALPHABET[rem])
    return "".join(reversed(digits))


def b62_decode(text: str) -> int:
    if not text:
        raise BadTimestamp("Missing timestamp")
    number = 0
    for c in text:
        try:
            number = number * 62 + _B62_INDEX[c]
        except KeyError:
            raise BadTimestamp("Invalid timestamp") from None
    return number
