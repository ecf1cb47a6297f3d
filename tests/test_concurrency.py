# =============================================================================
# tests/test_concurrency.py - Request Isolation Tests
# =============================================================================
# A slow MongoDB call must not hold up unrelated requests: handlers that use
# the store run in FastAPI's threadpool, not on the event loop.
# =============================================================================

import asyncio
import time
from unittest.mock import MagicMock

import httpx
import pytest

from app.dependencies import get_store
from app.main import app

STORE_DELAY = 0.5


@pytest.fixture
def slow_store(client):
    """Store whose reads take STORE_DELAY seconds."""

    def slow_find(*args, **kwargs):
        time.sleep(STORE_DELAY)
        return []

    store = MagicMock()
    store.find.side_effect = slow_find
    app.dependency_overrides[get_store] = lambda: store
    return store


async def _list_profiles_and_check_liveness():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        listing = asyncio.create_task(http.get("/api/profile"))
        await asyncio.sleep(0.05)

        started = time.perf_counter()
        live = await http.get("/api/health/live")
        latency = time.perf_counter() - started

        profiles = await listing
    return profiles, live, latency


class TestSlowStore:

    def test_independent_request_not_blocked(self, slow_store):
        profiles, live, latency = asyncio.run(_list_profiles_and_check_liveness())

        assert live.status_code == 200
        assert latency < STORE_DELAY / 2
        assert profiles.status_code == 200
        assert profiles.json() == []
        slow_store.find.assert_called_once()
