"""URL-safe, timestamped HMAC-SHA256 signed tokens.

The FastAPI cookie helpers live in tokensign.web and are not imported here.
"""

from tokensign.errors import (
    BadSignature,
    BadTimestamp,
    DecodingError,
    DecompressionError,
    DeserializationError,
    SignatureExpired,
    SigningError,
)
from tokensign.signing import DEFAULT_SALT, BaseSigner, TimestampSigner, dumps, loads

__version__ = "1.0.0"

__all__ = (
    "DEFAULT_SALT",
    "BaseSigner",
    "TimestampSigner",
    "dumps",
    "loads",
    "SigningError",
    "BadSignature",
    "BadTimestamp",
    "SignatureExpired",
    "DecodingError",
    "DecompressionError",
    "DeserializationError",
)
