"""Database session management.

Provides session factory for database access with proper
thread-safety for FastAPI concurrency.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finfly import config
from finfly.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def get_engine(database_url: str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL to enable connection pooling.
    Subsequent calls with the same URL return the cached engine.

    SQLite URLs get check_same_thread=False so FastAPI's threadpool can
    share the connection; in-memory SQLite also uses StaticPool so every
    session sees the same database.

    Args:
        database_url: SQLAlchemy URL. Defaults to config.database_url().

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if database_url is None:
        database_url = config.database_url()

    if database_url in _engine_cache:
        return _engine_cache[database_url]

    url = make_url(database_url)
    kwargs: dict = {"echo": False}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            # Create parent directories only when creating a new engine
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    _engine_cache[database_url] = engine

    return engine


def _get_session_factory(database_url: str | None = None) -> sessionmaker:
    """Get cached session factory for the database."""
    if database_url is None:
        database_url = config.database_url()

    if database_url in _session_factory_cache:
        return _session_factory_cache[database_url]

    engine = get_engine(database_url)
    factory = sessionmaker(bind=engine)
    _session_factory_cache[database_url] = factory

    return factory


def get_session(database_url: str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use session_scope() instead.
    """
    factory = _get_session_factory(database_url)
    return factory()


@contextmanager
def session_scope(database_url: str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with session_scope() as session:
            session.add(record)
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None) -> None:
    """Create tables if they do not exist.

    Called once during application startup.
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
