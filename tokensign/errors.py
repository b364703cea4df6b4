from __future__ import annotations


class SigningError(Exception):
    """Base class for every failure raised by tokensign."""


class BadSignature(SigningError):
    """Signature is missing, malformed or does not match."""


class BadTimestamp(BadSignature):
    """Timestamp segment is missing or not valid base62."""


class SignatureExpired(BadSignature):
    """Signature is valid but older than the allowed age."""

    def __init__(self, age: float, max_age: float) -> None:
        super().__init__(f"Signature age {age:.0f}s exceeds max_age {max_age:.0f}s")
        self.age = age
        self.max_age = max_age


class DecodingError(SigningError):
    """Base64 payload is malformed."""


class DecompressionError(SigningError):
    """Compression marker is present but the DEFLATE stream is invalid."""


class DeserializationError(SigningError):
    """Payload is not valid JSON for the requested shape."""
