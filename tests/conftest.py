"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A seeded in-memory hub repository
- A test application wired to that repository
- Test client setup
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hubs_api.adapters.repository.memory import InMemoryHubRepository
from hubs_api.api.errors import register_exception_handlers
from hubs_api.api.routes import fallback_router, router

SEED_HUBS = [
    {"name": "api-1"},
    {"name": "api-2"},
    {"name": "db-1"},
]


@pytest.fixture
def repository() -> InMemoryHubRepository:
    """Create an in-memory repository holding three hubs (ids 1-3)."""
    return InMemoryHubRepository(SEED_HUBS)


@pytest.fixture
def app(repository: InMemoryHubRepository) -> FastAPI:
    """Create test FastAPI application backed by the in-memory repository."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router)
    test_app.include_router(fallback_router)
    test_app.state.hubs = repository
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
