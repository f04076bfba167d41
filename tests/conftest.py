"""
Test configuration and fixtures for the short link service.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from shortlink_app.config import Settings
from shortlink_app.database.connection import Base
from shortlink_app.dependencies import get_link_service
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage.strategies import InMemoryLinkStore, SQLAlchemyLinkStore
import shortlink_app.models  # noqa: F401  (registers the links table)


class FakeClock:
    """Controllable clock for expiration tests"""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def test_settings():
    """Settings with a cheap bcrypt cost so password tests stay fast"""
    return Settings(
        store_backend="memory",
        cache_backend="null",
        display_domain="https://sho.rt",
        password_hash_rounds=4,
        retry_limit=5,
    )


@pytest.fixture
def memory_store():
    return InMemoryLinkStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(memory_store, test_settings):
    """Link service on the in-memory store with the real clock"""
    return LinkService(store=memory_store, settings=test_settings)


@pytest.fixture
def clocked_service(memory_store, test_settings, clock):
    """Link service whose notion of "now" the test controls"""
    return LinkService(store=memory_store, settings=test_settings, clock=clock)


@pytest.fixture(scope="function")
def sql_store(tmp_path):
    """
    SQLite-backed store in a fresh database file per test.
    A file (not :memory:) so worker threads share one database.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'links.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    try:
        yield SQLAlchemyLinkStore(session_factory=session_factory)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(service):
    """
    Create a test client with the link service dependency overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_link_service] = lambda: service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
