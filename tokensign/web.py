from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import HTTPException, Request, Response
from pydantic import BaseModel

from tokensign.config import settings
from tokensign.errors import SigningError
from tokensign.signing import dumps, loads


logger = logging.getLogger("tokensign.web")

_MISSING = object()


def set_signed_cookie(
    response: Response,
    key: str,
    value: Any,
    *,
    secret: str | bytes | None = None,
    salt: str | bytes | None = None,
    max_age: int | None = None,
    compress: bool | None = None,
    secure: bool = False,
) -> str:
    """Sign value into an HttpOnly cookie that the browser drops after max_age seconds."""
    max_age = settings.MAX_AGE if max_age is None else max_age
    token = dumps(
        value,
        settings.require_secret() if secret is None else secret,
        salt=settings.SALT if salt is None else salt,
        compress=settings.COMPRESS if compress is None else compress,
    )
    response.set_cookie(
        key,
        token,
        httponly=True,
        samesite="lax",
        secure=secure,
        max_age=max_age,
    )
    return token


def read_signed_cookie(
    request: Request,
    key: str,
    *,
    secret: str | bytes | None = None,
    salt: str | bytes | None = None,
    max_age: int | None = None,
    model: type[BaseModel] | None = None,
    default: Any = None,
) -> Any:
    """Return the value stored by set_signed_cookie, or default if missing or invalid.

    A signed value may itself be None; pass a sentinel default to tell the two apart.
    """
    tok = request.cookies.get(key)
    if not tok:
        return default
    try:
        return loads(
            tok,
            settings.require_secret() if secret is None else secret,
            salt=settings.SALT if salt is None else salt,
            max_age=settings.MAX_AGE if max_age is None else max_age,
            model=model,
        )
    except SigningError as e:
        logger.debug("cookie.rejected key=%s reason=%s", key, type(e).__name__)
        return default


def signed_cookie(
    key: str,
    *,
    secret: str | bytes | None = None,
    salt: str | bytes | None = None,
    max_age: int | None = None,
    model: type[BaseModel] | None = None,
) -> Callable[[Request], Any]:
    """FastAPI dependency returning the cookie's value, or a 401 when it is absent or invalid."""

    def dependency(request: Request) -> Any:
        value = read_signed_cookie(
            request, key, secret=secret, salt=salt, max_age=max_age, model=model, default=_MISSING
        )
        if value is _MISSING:
            raise HTTPException(status_code=401, detail=f"Missing or invalid {key} cookie")
        return value

    return dependency
