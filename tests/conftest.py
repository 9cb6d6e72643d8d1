"""
Pytest configuration and fixtures for database testing.

Provides shared test fixtures for database setup, cleanup, and test data seeding.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from wms_preferences.models import (
    ApplicationPreference,
    Base,
    ModulePreference,
    RolePreference,
    UserPreference,
)
from wms_preferences.repositories.preference_repo import PreferenceRepository


@pytest.fixture(scope="function")
def test_db_path() -> Generator[Path, None, None]:
    """
    Create a temporary database file for testing.

    File-based SQLite is used instead of in-memory so that several sessions
    can see the same data, which the detached-entity and locking tests need.

    Yields:
        Path to temporary test database file
    """
    fd, path = tempfile.mkstemp(suffix=".db", prefix="test_prefs_")
    os.close(fd)

    db_path = Path(path)

    yield db_path

    for suffix in ("", "-wal", "-shm"):
        candidate = Path(f"{db_path}{suffix}")
        if candidate.exists():
            candidate.unlink()


@pytest.fixture(scope="function")
def test_engine(test_db_path: Path) -> Generator[Engine, None, None]:
    """
    Create a SQLAlchemy engine for the test database.

    Configures SQLite with the same pragmas as production and creates all
    preference tables.

    Args:
        test_db_path: Path to test database file

    Yields:
        Configured SQLAlchemy engine
    """
    engine = create_engine(
        f"sqlite:///{test_db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine: Engine) -> sessionmaker:
    """
    Session factory bound to the test engine.

    Use it to open a second session, e.g. to produce detached instances
    or a concurrent writer.
    """
    return sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def test_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Create a database session for testing.

    The session starts without a transaction. Tests that write through the
    repository open one with ``with test_session.begin():``.

    Yields:
        Database session for the test
    """
    session = session_factory()

    yield session

    session.rollback()
    session.close()


@pytest.fixture(scope="function")
def seeded_db(test_session: Session) -> Session:
    """
    Provide a database session pre-populated with preferences of every scope.

    Seeds:
    - 1 application preference (timeout)
    - 1 module preference (TMS/pageSize)
    - 1 role preference (ROLE_ADMIN/dashboard)
    - 3 user preferences (alice/theme, alice/language, bob/theme)

    The seeding transaction is committed, so the returned session has no
    active transaction.

    Args:
        test_session: Empty test database session

    Returns:
        Database session with seeded test data
    """
    with test_session.begin():
        test_session.add_all([
            ApplicationPreference("timeout", value="30", description="Request timeout in seconds"),
            ModulePreference("TMS", "pageSize", value="25", minimum=10, maximum=100),
            RolePreference("ROLE_ADMIN", "dashboard", value="full"),
            UserPreference("alice", "theme", value="light"),
            UserPreference("alice", "language", value="en", from_file=False),
            UserPreference("bob", "theme", value="dark"),
        ])

    return test_session


@pytest.fixture(scope="function")
def preference_repo(test_session: Session) -> PreferenceRepository:
    """Provide PreferenceRepository instance for testing."""
    return PreferenceRepository(test_session)
