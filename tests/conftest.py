"""
Pytest configuration and shared fixtures for the version history tests.
"""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from wordtrail.config import Settings
from wordtrail.db.mongo import MongoStore, VersionRepository
from wordtrail.main import create_app
from wordtrail.services.versions import VersionStore


class TickingClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start=datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        now = self.current
        self.current += timedelta(seconds=1)
        return now


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def store(mongo_client):
    """Connected store over an in-memory mongomock client."""
    handle = MongoStore("mongodb://localhost/test", "wordtrail_test", client=mongo_client)
    handle.connect()
    yield handle
    handle.close()


@pytest.fixture
def repository(store):
    return VersionRepository(store.collection)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def version_store(repository, clock):
    return VersionStore(repository, clock=clock)


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.APP_ENV = "test"
    settings.SERIALIZE_SAVES = False
    settings.PREVIEW_CHARS = 20
    return settings


@pytest.fixture
def app(test_settings, mongo_client):
    store = MongoStore("mongodb://localhost/test", "wordtrail_api_test", client=mongo_client)
    return create_app(settings=test_settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
