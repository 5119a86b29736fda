"""Pytest configuration and shared fixtures."""

import os

# Must be set before anything imports aura.core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CONSOLE_LOGGING", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from aura.db.base import Base
import aura.db.models  # noqa: F401  (registers tables on Base.metadata)


@pytest.fixture
def engine():
    """A fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    """API client whose requests share ``db_session``."""
    from aura.api.deps import get_db
    from aura.api.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
