"""
Environment-driven settings.

Every accessor reads `os.environ` directly; call them at startup and keep the
result rather than re-reading per request.
"""

from __future__ import annotations

import os

DEFAULT_ALLOWED_ORIGINS: tuple[str, ...] = (
    "https://moslemerror-maker.github.io",
    "https://roadways-ledger-frontend-xxxx.github.io",
    "https://roadways.bestcement.co.in",
)

_SSL_MODES = {"require", "verify-full", "disable"}


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 10000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def database_ssl() -> str:
    mode = _env_str("DATABASE_SSL", "require").lower()
    return mode if mode in _SSL_MODES else "require"


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def command_timeout() -> float:
    return float(max(1, _env_int("DB_COMMAND_TIMEOUT", 30)))


def allowed_origins() -> list[str]:
    """
    Browser origins allowed to call the API.

    `ALLOWED_ORIGINS` (comma-separated) replaces the built-in list when set.
    """
    raw = os.environ.get("ALLOWED_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    origins = [item.strip().rstrip("/") for item in raw.split(",")]
    return [origin for origin in origins if origin]
