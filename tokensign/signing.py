from __future__ import annotations

import hashlib
import hmac
import logging
import time
from datetime import timedelta
from typing import Any, Callable

from pydantic import BaseModel

from tokensign.compression import compress as compress_payload
from tokensign.compression import decompress
from tokensign.encoding import b62_decode, b62_encode, b64_decode, b64_encode
from tokensign.errors import BadSignature, BadTimestamp, SignatureExpired
from tokensign.serializer import JSONSerializer


logger = logging.getLogger("tokensign.signing")

SEP = ":"
DEFAULT_SALT = "tokensign.signing"
KEY_PURPOSE = b"signer"

Clock = Callable[[], float]


def _to_bytes(value: str | bytes) -> bytes:
    # Lone surrogates in caller text must reach the compare, not raise.
    return value.encode("utf-8", "surrogatepass") if isinstance(value, str) else bytes(value)


def _seconds(max_age: float | timedelta) -> float:
    if isinstance(max_age, timedelta):
        return max_age.total_seconds()
    return max_age


def derive_key(secret: str | bytes, salt: str | bytes) -> bytes:
    """HMAC-SHA256(secret, salt + "signer"): one independent key per salt."""
    return hmac.new(_to_bytes(secret), _to_bytes(salt) + KEY_PURPOSE, hashlib.sha256).digest()


def _load(raw: bytes, serializer: Any, model: type[BaseModel] | None) -> Any:
    raw = decompress(raw)
    if model is None:
        return serializer.deserialize(raw)
    return serializer.deserialize(raw, model=model)


def _pack(obj: Any, serializer: Any, compress: bool) -> bytes:
    data = serializer.serialize(obj)
    if compress:
        data = compress_payload(data)
    return data


class BaseSigner:
    """Signs strings as ``value:signature`` with a salt-scoped HMAC-SHA256 key."""

    def __init__(self, secret: str | bytes, salt: str | bytes = DEFAULT_SALT) -> None:
        if not secret:
            raise ValueError("A non-empty secret is required")
        self.salt = _to_bytes(salt)
        self._key = derive_key(secret, self.salt)

    def signature(self, value: str | bytes) -> str:
        return b64_encode(hmac.new(self._key, _to_bytes(value), hashlib.sha256).digest())

    def sign(self, value: str | bytes) -> str:
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return f"{value}{SEP}{self.signature(value)}"

    def unsign(self, signed_value: str) -> str:
        value, sep, sig = signed_value.rpartition(SEP)
        # Same error for a missing separator and a wrong signature.
        if not sep or not hmac.compare_digest(_to_bytes(sig), _to_bytes(self.signature(value))):
            logger.debug("token.bad_signature")
            raise BadSignature("Signature does not match")
        return value

    def sign_object(self, obj: Any, compress: bool = False, serializer: Any = None) -> str:
        data = _pack(obj, serializer or JSONSerializer(), compress)
        return self.sign(b64_encode(data))

    def unsign_object(
        self,
        signed_object: str,
        model: type[BaseModel] | None = None,
        serializer: Any = None,
    ) -> Any:
        raw = b64_decode(self.unsign(signed_object))
        return _load(raw, serializer or JSONSerializer(), model)


class TimestampSigner:
    """Signs ``base64(value):base62(timestamp)`` and enforces a max age on unsign."""

    def __init__(
        self,
        secret: str | bytes,
        salt: str | bytes = DEFAULT_SALT,
        clock: Clock = time.time,
    ) -> None:
        self._signer = BaseSigner(secret, salt)
        self._clock = clock

    @property
    def salt(self) -> bytes:
        return self._signer.salt

    def now(self) -> int:
        return int(self._clock())

    def timestamp(self) -> str:
        return b62_encode(self.now())

    def sign(self, value: str | bytes) -> str:
        return self._signer.sign(f"{b64_encode(_to_bytes(value))}{SEP}{self.timestamp()}")

    def unsign(self, signed_value: str, max_age: float | timedelta | None = None) -> bytes:
        """Verify signed_value and return the original bytes.

        max_age is in seconds (or a timedelta); None skips the age check.
        Raises BadSignature, BadTimestamp, SignatureExpired or DecodingError.
        """
        inner = self._signer.unsign(signed_value)
        value, sep, ts = inner.rpartition(SEP)
        if not sep:
            logger.debug("token.bad_timestamp")
            raise BadTimestamp("Missing timestamp")
        timestamp = b62_decode(ts)
        if max_age is not None:
            limit = _seconds(max_age)
            age = self.now() - timestamp
            if age > limit:
                logger.debug("token.expired age=%ds max_age=%ds", age, limit)
                raise SignatureExpired(age, limit)
        return b64_decode(value)

    def sign_object(self, obj: Any, compress: bool = False, serializer: Any = None) -> str:
        return self.sign(_pack(obj, serializer or JSONSerializer(), compress))

    def unsign_object(
        self,
        signed_object: str,
        max_age: float | timedelta | None = None,
        model: type[BaseModel] | None = None,
        serializer: Any = None,
    ) -> Any:
        raw = self.unsign(signed_object, max_age=max_age)
        return _load(raw, serializer or JSONSerializer(), model)


def dumps(
    obj: Any,
    secret: str | bytes,
    salt: str | bytes = DEFAULT_SALT,
    compress: bool = False,
    serializer: Any = None,
    clock: Clock = time.time,
) -> str:
    """Return a URL-safe, timestamped, signed token carrying obj as JSON.

    With compress=True the JSON is zlib-compressed when that makes it shorter.
    """
    return TimestampSigner(secret, salt, clock=clock).sign_object(obj, compress=compress, serializer=serializer)


def loads(
    token: str,
    secret: str | bytes,
    salt: str | bytes = DEFAULT_SALT,
    max_age: float | timedelta | None = None,
    model: type[BaseModel] | None = None,
    serializer: Any = None,
    clock: Clock = time.time,
) -> Any:
    """Reverse of dumps(). Raises a tokensign.errors.SigningError subclass on failure."""
    signer = TimestampSigner(secret, salt, clock=clock)
    return signer.unsign_object(token, max_age=max_age, model=model, serializer=serializer)
