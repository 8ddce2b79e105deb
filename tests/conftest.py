"""
Pytest configuration for tests.

Forces an in-memory SQLite database, a throwaway data directory and a fixed
token secret BEFORE any devsync imports, then gives every test a fresh
schema on its own in-memory engine.
"""
import os
import tempfile

# MUST be set before any devsync imports
os.environ["DEVSYNC_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DEVSYNC_DATA_DIR"] = tempfile.mkdtemp(prefix="devsync-test-")
os.environ["DEVSYNC_JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import devsync.database as db_module
from devsync.config import clear_config_cache
from devsync.database import init_db


@pytest.fixture(autouse=True)
def test_db():
    """Set up an in-memory SQLite database for each test."""
    clear_config_cache()
    db_module.reset_engine()

    # StaticPool so all sessions share the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    db_module._engine = engine
    db_module._SessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine
    )
    init_db(engine)

    yield engine

    db_module.reset_engine()
    clear_config_cache()


@pytest.fixture
def db_session():
    """Get a database session for direct DB manipulation in tests."""
    session = db_module.get_session()
    yield session
    session.close()


@pytest.fixture
def make_account():
    """Register an account and return (account_id, token)."""
    from devsync.services import register

    def _make(name: str, email: str = None, password: str = "secret123"):
        result = register(name=name, email=email or f"{name.lower()}@x.com", password=password)
        assert "error" not in result, result
        return result["user"]["id"], result["token"]

    return _make


@pytest.fixture
def alice(make_account):
    return make_account("Alice", "alice@x.com")


@pytest.fixture
def bob(make_account):
    return make_account("Bob", "bob@x.com")
