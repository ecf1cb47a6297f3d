# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Replaces MongoDB with mongomock
# - Provides a TestClient wired to the in-memory store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB_NAME", "devnet-test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-unit-tests")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import mongomock
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_github_client, get_store, get_token_service
from app.main import app
from lib.github_client import GithubClient
from lib.mongo_client import MongoStore
from lib.security import TokenService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """MongoStore backed by a fresh mongomock database."""
    database = mongomock.MongoClient()["devnet-test"]
    store = MongoStore(database)
    store.ensure_indexes()
    return store


@pytest.fixture
def token_service():
    """Token service with a short test secret."""
    return TokenService(secret="test-secret-key-for-unit-tests", expires_in=3600)


@pytest.fixture
def github_repos():
    """Repository payload the fake GitHub returns."""
    return [
        {"id": 1, "name": "dotfiles", "html_url": "https://github.com/janedoe/dotfiles"},
        {"id": 2, "name": "devnet", "html_url": "https://github.com/janedoe/devnet"},
    ]


@pytest.fixture
def github_client(github_repos):
    """GitHub client answering from memory: 'janedoe' exists, nobody else does."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/janedoe/repos":
            return httpx.Response(200, json=github_repos)
        return httpx.Response(404, json={"message": "Not Found"})

    return GithubClient(base_url="https://github.test", transport=httpx.MockTransport(handler))


@pytest.fixture
def client(store, token_service, github_client):
    """TestClient with the store, token service and GitHub client overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_github_client] = lambda: github_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """
    Register a user through the API.

    Returns a function that takes name/email/password and returns the
    auth headers for that user.
    """

    def _register(name="Jane Doe", email="jane@example.com", password="secret1"):
        response = client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register):
    """Auth headers for the default test user."""
    return register()


@pytest.fixture
def sample_profile_form():
    """Profile form as a client would send it."""
    return {
        "status": "Developer",
        "skills": "Python, FastAPI ,MongoDB",
        "company": "Acme",
        "location": "Berlin",
        "githubusername": "janedoe",
        "twitter": "https://twitter.com/janedoe",
    }
