from __future__ import annotations

import logging

from core import config
from core.logging_config import setup_logging


def test_defaults(monkeypatch) -> None:
    for name in ("PORT", "HOST", "LOG_LEVEL", "DATABASE_SSL", "ALLOWED_ORIGINS", "DB_POOL_MAX_SIZE"):
        monkeypatch.delenv(name, raising=False)

    assert config.port() == 10000
    assert config.host() == "0.0.0.0"
    assert config.log_level() == "INFO"
    assert config.database_ssl() == "require"
    assert config.pool_max_size() == 5
    assert config.allowed_origins() == list(config.DEFAULT_ALLOWED_ORIGINS)


def test_port_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    assert config.port() == 8080


def test_invalid_port_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    assert config.port() == 10000


def test_unknown_ssl_mode_falls_back_to_require(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_SSL", "sometimes")
    assert config.database_ssl() == "require"


def test_pool_max_never_below_min(monkeypatch) -> None:
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "4")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")
    assert config.pool_max_size() == 4


def test_allowed_origins_override(monkeypatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", " https://a.example/ , ,https://b.example")
    assert config.allowed_origins() == ["https://a.example", "https://b.example"]


def test_setup_logging_sets_level_once() -> None:
    root = logging.getLogger()
    handlers_before = list(root.handlers)
    level_before = root.level
    try:
        setup_logging("warning")
        setup_logging("warning")
        assert root.level == logging.WARNING
        assert len(root.handlers) == max(1, len(handlers_before))
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers_before:
                root.removeHandler(handler)
        root.setLevel(level_before)
