"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. API tests talk to the
app through TestClient with get_db overridden, so nothing touches the
on-disk database and the startup hook (table creation, seeding) never runs.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_CATEGORIES"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  (registers tables on Base.metadata)
from db import Base, build_engine
from main import app
from app.deps import get_db
from app.services.ledger_store import LedgerStore
from app.services.registry import CategoryRegistry, PersonRegistry


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session) -> LedgerStore:
    return LedgerStore(db_session)


@pytest.fixture
def people(store) -> PersonRegistry:
    return PersonRegistry(store)


@pytest.fixture
def categories(store) -> CategoryRegistry:
    return CategoryRegistry(store)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


