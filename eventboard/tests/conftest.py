"""Shared fixtures: an in-memory database and both applications."""

import pytest
from fastapi.testclient import TestClient

from eventboard.api.app import create_application
from eventboard.db import Database, DatabaseConfig, EventStore
from eventboard.web import create_app

from .helpers import FakeEventAPI, WebTestConfig, sample_event


@pytest.fixture
def database():
    database = Database(DatabaseConfig(database_url="sqlite://"))
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def store(database):
    return EventStore(database)


@pytest.fixture
def api_client(database):
    app = create_application(database)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def fake_api():
    return FakeEventAPI([
        sample_event('1', title='Spring Gala'),
        sample_event('2', title='Jazz Night', image='https://cdn.example.com/jazz.jpg'),
        sample_event('3', user_id='someone-else', title='Other Party'),
    ])


@pytest.fixture
def web_client(fake_api):
    app = create_app(WebTestConfig, api_client=fake_api)
    return app.test_client()
