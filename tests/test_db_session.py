"""Tests for engine caching and session_scope."""

import pytest

from finfly.db import repo
from finfly.db.schema import User
from finfly.db.session import get_engine, init_db, session_scope


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'nested' / 'finfly.db'}"
    init_db(url)
    return url


class TestEngine:
    def test_engine_cached_per_url(self, database_url):
        assert get_engine(database_url) is get_engine(database_url)

    def test_parent_directory_created(self, tmp_path, database_url):
        assert (tmp_path / "nested" / "finfly.db").exists()


class TestSessionScope:
    def test_commits_on_success(self, database_url):
        with session_scope(database_url) as session:
            session.add(User(user_id="u1", name="Ana", email="ana@example.com", password_hash="x"))

        with session_scope(database_url) as session:
            assert repo.get_user(session, "u1") is not None

    def test_rolls_back_on_error(self, database_url):
        with pytest.raises(RuntimeError):
            with session_scope(database_url) as session:
                session.add(
                    User(user_id="u2", name="Bruno", email="bruno@example.com", password_hash="x")
                )
                session.flush()
                raise RuntimeError("boom")

        with session_scope(database_url) as session:
            assert repo.get_user(session, "u2") is None
