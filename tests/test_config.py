"""Tests for configuration helpers."""

from finfly import config


def test_database_url_default(monkeypatch) -> None:
    monkeypatch.delenv("FINFLY_DATABASE_URL", raising=False)

    assert config.database_url() == config.DEFAULT_DATABASE_URL


def test_database_url_from_env(monkeypatch) -> None:
    monkeypatch.setenv("FINFLY_DATABASE_URL", "postgresql://u:p@db/finfly")

    assert config.database_url() == "postgresql://u:p@db/finfly"


def test_jwt_secret_falls_back_in_test_env(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    assert config.jwt_secret() == config.DEFAULT_JWT_SECRET


def test_jwt_expires_minutes_invalid_uses_default(monkeypatch) -> None:
    monkeypatch.setenv("JWT_EXPIRES_MINUTES", "soon")

    assert config.jwt_expires_minutes() == config.DEFAULT_JWT_EXPIRES_MINUTES


def test_jwt_expires_minutes_parsed(monkeypatch) -> None:
    monkeypatch.setenv("JWT_EXPIRES_MINUTES", "15")

    assert config.jwt_expires_minutes() == 15


def test_cors_allow_origins_defaults_in_dev(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    assert config.cors_allow_origins() == ["http://localhost:5173", "http://127.0.0.1:5173"]


def test_cors_allow_origins_parses_comma_separated_list(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.com, https://b.com")

    assert config.cors_allow_origins() == ["https://a.com", "https://b.com"]


def test_cors_allow_origins_empty_in_prod(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    assert config.cors_allow_origins() == []


def test_debug_disabled_by_default(monkeypatch) -> None:
    monkeypatch.delenv("FINFLY_DEBUG", raising=False)

    assert config.debug_enabled() is False


def test_log_level_rejects_unknown(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert config.log_level() == "INFO"


def test_log_level_normalized(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.log_level() == "DEBUG"
