"""Request-scoped dependencies shared by the app factory and routers."""

from __future__ import annotations

from typing import Generator

from fastapi import Request

from finfly.db.repo import DbSession
from finfly.db.session import get_session


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(getattr(request.app.state, "database_url", None))
    try:
        yield session
    finally:
        session.close()
