"""
Database connection, session management and transaction scope.

Provides the SQLAlchemy engine and session factory. The preference repository
never begins or commits transactions; callers wrap writes in get_db().
"""

import os
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from wms_preferences.utils.config_loader import config
from wms_preferences.utils.logger import logger


# Environment wins over the YAML file
DATABASE_URL = os.getenv("DATABASE_URL") or config.get("database.url", "sqlite:///data/preferences.db")

engine = create_engine(
    DATABASE_URL,
    echo=bool(config.get("database.echo", False)),
    pool_pre_ping=True,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Set SQLite pragmas on every new connection.

    - foreign_keys: the joined preference tables reference COR_PREFERENCE
    - journal_mode: WAL lets readers proceed during a write
    - synchronous: NORMAL is safe with WAL
    """
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()
        logger.debug("SQLite pragmas set: foreign_keys=ON, journal_mode=WAL, synchronous=NORMAL")


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db_session() -> Session:
    """
    Create a new database session.

    The caller owns the session and must begin a transaction before
    calling any repository write operation.

    Returns:
        SQLAlchemy Session instance

    Example:
        session = get_db_session()
        try:
            with session.begin():
                repo = PreferenceRepository(session)
                repo.save(pref)
        finally:
            session.close()
    """
    return SessionLocal()


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """
    Context manager providing a session inside an active transaction.

    Commits on success, rolls back and re-raises on exception, and always
    closes the session.

    Yields:
        SQLAlchemy Session instance

    Example:
        with get_db() as db:
            PreferenceRepository(db).save(pref)
    """
    session = SessionLocal()
    try:
        with session.begin():
            yield session
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all preference tables.

    Production schemas are managed by Alembic; this is meant for local
    setups and tests.
    """
    from wms_preferences.models import Base
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")


def check_db_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
