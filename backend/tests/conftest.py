"""Shared fixtures: an isolated SQLite database per test and API clients."""
import os

# Keep the default engine off disk before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from backend.app.api.transactions import get_repository
from backend.app.db import build_engine, get_db, init_db
from backend.app.main import app
from backend.app.repositories.transaction_repository import TransactionRepository
from backend.app.storage.transaction_store import InMemoryTransactionStore


@pytest.fixture
def engine(tmp_path):
    test_engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Client whose requests hit a fresh SQLite file."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def memory_store():
    return InMemoryTransactionStore()


@pytest.fixture
def memory_client(memory_store):
    """Client backed by the in-memory store instead of a database."""
    app.dependency_overrides[get_repository] = lambda: TransactionRepository(memory_store)
    yield TestClient(app)
    app.dependency_overrides.clear()
