from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from tokensign.signing import DEFAULT_SALT

# Allows local dev via a .env file. Environment variables still win.
load_dotenv(override=False)


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v


def _env_bool(name: str, default: bool = False) -> bool:
    v = _env(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        self.APP_ENV: str = _env("APP_ENV", "development") or "development"

        self.SECRET: str = _env("TOKENSIGN_SECRET", "") or ""
        # Dev-friendly default (still require a real value in production).
        if self.APP_ENV == "development" and not self.SECRET:
            self.SECRET = "devsecret"

        self.SALT: str = _env("TOKENSIGN_SALT", DEFAULT_SALT) or DEFAULT_SALT
        self.MAX_AGE: int = int(_env("TOKENSIGN_MAX_AGE", "3600") or 3600)
        self.COMPRESS: bool = _env_bool("TOKENSIGN_COMPRESS", False)
        self.LOG_LEVEL: str = (_env("TOKENSIGN_LOG_LEVEL", "WARNING") or "WARNING").upper()

    def require_secret(self) -> str:
        if not self.SECRET:
            raise RuntimeError("TOKENSIGN_SECRET must be set")
        return self.SECRET


def configure_logging(level: str | None = None) -> None:
    logging.getLogger("tokensign").setLevel(level or settings.LOG_LEVEL)


settings = Settings()
