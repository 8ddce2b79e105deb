"""
Database connection and session management for DevSync.

Supports SQLite (default, file in the data dir) and PostgreSQL, selected by
the configured database URL.
"""

from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool, QueuePool

from devsync.config import get_database_url, ensure_data_dir, is_postgres
from devsync.models import Base

_engine = None
_SessionLocal = None


def _create_engine(db_url: str):
    """Create a new SQLAlchemy engine for db_url."""
    if is_postgres(db_url):
        return create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            echo=False,
        )

    if ":memory:" not in db_url:
        ensure_data_dir()
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def get_engine(db_url: Optional[str] = None):
    """Get SQLAlchemy engine. Accepts optional URL override for testing."""
    global _engine

    if _engine is not None:
        return _engine

    _engine = _create_engine(db_url or get_database_url())
    return _engine


def get_session_factory():
    """Get session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=get_engine()
        )
    return _SessionLocal


def get_session() -> Session:
    """
    Get a new database session.

    Usage:
        db = get_session()
        try:
            # do work
            db.commit()
        finally:
            db.close()
    """
    return get_session_factory()()


def init_db(engine=None):
    """Create all tables. Safe to call multiple times."""
    eng = engine or get_engine()
    Base.metadata.create_all(bind=eng)


def reset_engine():
    """Reset engine and session factory (for testing)."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
        _engine = None
    _SessionLocal = None


def check_connection() -> dict:
    """Check database connection and return status info."""
    try:
        engine = get_engine()
        with engine.connect() as conn:
            if engine.dialect.name == "postgresql":
                version = conn.execute(text("SELECT version()")).scalar()
                return {"status": "connected", "type": "postgres", "version": version}
            version = conn.execute(text("SELECT sqlite_version()")).scalar()
            return {"status": "connected", "type": "sqlite", "version": version}
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
        }
