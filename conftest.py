"""
Shared pytest fixtures - every app gets its own SQLite file and services
"""

import pytest

from app import create_app
from config import Settings


@pytest.fixture
def settings():
    return Settings(
        ANTHROPIC_API_KEY=None,
        SEARCH_API_KEY=None,
        WEB_SEARCH_ENABLED=False,
        SECRET_KEY='test-secret'
    )


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'fitness_coach_test.db'}"
    monkeypatch.setenv('DATABASE_URL', url)
    monkeypatch.delenv('POSTGRES_URL', raising=False)
    return url


@pytest.fixture
def app(db_url, settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
