"""Tests for wikiadmin/db/engine.py - Database engine and session management."""

import contextlib

from sqlalchemy import text
from sqlmodel import create_engine

from wikiadmin.db.engine import enable_sqlite_foreign_keys, get_session


def test_get_session():
    """Test get_session() yields a database session."""
    gen = get_session()
    session = next(gen)

    assert session is not None

    with contextlib.suppress(StopIteration):
        next(gen)


def test_sqlite_foreign_keys_enabled():
    engine = create_engine("sqlite://")
    enable_sqlite_foreign_keys(engine)

    with engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_sqlite_foreign_keys_default_off():
    engine = create_engine("sqlite://")

    with engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 0
