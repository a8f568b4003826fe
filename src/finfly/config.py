"""Configuration helpers for environment variables.

Values are read at call time so tests can monkeypatch the environment.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes"}

DEFAULT_DATABASE_URL = "sqlite:///data/finfly.db"
DEFAULT_JWT_SECRET = "finfly-development-secret-change-me-in-production"
DEFAULT_JWT_EXPIRES_MINUTES = 60 * 24 * 7


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip().lower() or "dev"


def is_local_env() -> bool:
    return app_env() in {"dev", "local", "test", "ci"}


def database_url() -> str:
    """Return the SQLAlchemy database URL."""
    return (get_env("FINFLY_DATABASE_URL", "") or "").strip() or DEFAULT_DATABASE_URL


def jwt_secret() -> str:
    """Return the token signing secret.

    Falls back to a development secret; outside local environments the
    fallback is logged as a warning.
    """
    secret = (get_env("JWT_SECRET", "") or "").strip()
    if secret:
        return secret
    if not is_local_env():
        logger.warning("jwt_secret_missing app_env=%s; using development secret", app_env())
    return DEFAULT_JWT_SECRET


def jwt_expires_minutes() -> int:
    """Return access token lifetime in minutes."""
    raw_value = (get_env("JWT_EXPIRES_MINUTES", "") or "").strip()
    if not raw_value:
        return DEFAULT_JWT_EXPIRES_MINUTES
    try:
        minutes = int(raw_value)
    except ValueError:
        logger.warning("jwt_expires_minutes_invalid value=%s", raw_value)
        return DEFAULT_JWT_EXPIRES_MINUTES
    return minutes if minutes > 0 else DEFAULT_JWT_EXPIRES_MINUTES


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if is_local_env():
        return ["http://localhost:5173", "http://127.0.0.1:5173"]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS",
        app_env(),
    )
    return []


def debug_enabled() -> bool:
    """Return whether error details are exposed in responses."""
    raw_value = get_env("FINFLY_DEBUG", "") or ""
    return raw_value.strip().lower() in _TRUE_VALUES


def log_level() -> str:
    """Return the root log level name."""
    level = (get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper()
    return level if level in logging.getLevelNamesMapping() else "INFO"
