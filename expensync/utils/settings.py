"""Runtime settings sourced from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

logger = logging.getLogger(__name__)

_DEV_JWT_SECRET = "expensync-dev-secret-change-me"

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:5173",
    "http://localhost:3000",
    "https://expensync.netlify.app",
)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


def _list_env(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    values = []
    for entry in raw.split(","):
        cleaned = entry.strip().strip('"').strip("'")
        if cleaned:
            values.append(cleaned)
    return tuple(values)


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_ttl_minutes: int = 15
    refresh_token_ttl_days: int = 7

    @classmethod
    def from_env(cls) -> "AuthSettings":
        secret = os.getenv("JWT_SECRET")
        if not secret:
            logger.warning("JWT_SECRET is not set; using the development secret")
            secret = _DEV_JWT_SECRET
        return cls(
            jwt_secret=secret,
            jwt_algorithm=(os.getenv("JWT_ALGORITHM") or "HS256").strip(),
            access_token_ttl_minutes=_int_env("ACCESS_TOKEN_TTL_MINUTES", 15),
            refresh_token_ttl_days=_int_env("REFRESH_TOKEN_TTL_DAYS", 7),
        )


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 5000),
            cors_origins=_list_env("CORS_ORIGINS") or DEFAULT_CORS_ORIGINS,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=None)
def get_auth_settings() -> AuthSettings:
    """Return the cached auth settings."""
    return AuthSettings.from_env()


@lru_cache(maxsize=None)
def get_server_settings() -> ServerSettings:
    return ServerSettings.from_env()


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_auth_settings.cache_clear()
    get_server_settings.cache_clear()
