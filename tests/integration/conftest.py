"""
Shared fixtures for integration tests.

Runs the real application, lifespan included, on the in-memory store.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from hubs_api.api.main import app
from hubs_api.config.settings import get_settings


@pytest.fixture
def live_client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Client for the application with startup and shutdown events run."""
    monkeypatch.setenv("HUB_STORE", "memory")
    monkeypatch.delenv("PORT", raising=False)
    get_settings.cache_clear()
    with TestClient(app) as client:
        yield client
    get_settings.cache_clear()
