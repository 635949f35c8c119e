"""Shared test fixtures for arteloo test suite."""

from __future__ import annotations

import httpx
import pytest

from arteloo.infrastructure.cache import MemoryCacheAdapter
from tests.payloads import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> MemoryCacheAdapter:
    """Fresh cache per test, driven by the fake clock."""
    return MemoryCacheAdapter(ttl_seconds=1800, clock=clock)


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()
