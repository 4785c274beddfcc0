# emissions/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy; SQLite by default, PostgreSQL via DATABASE_URL.

The Database object is built by the application factory and stored on
app.state; there is no module-level engine. Call initialize() once at
startup so every table exists before the first request.
"""

from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from emissions.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; DateTime columns are stored without a zone."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in IN_MEMORY_URLS:
            # One shared connection, otherwise every session sees an empty DB
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
    }


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """Owns the engine and session factory for one record store."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_engine(url, echo=echo, **_engine_options(url))
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _set_sqlite_pragmas)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def initialize(self):
        """
        Creates all tables. Safe to call multiple times.
        Import all models here so SQLAlchemy knows about them.
        """
        from emissions.models.vehicle import Vehicle            # noqa
        from emissions.models.test_result import TestResult     # noqa

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Schema ready on {self.engine.dialect.name} database")

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
