"""Root conftest for all tests.

Shared fixtures: a dict-backed token cache, a pinned clock for
date-dependent code, and helpers to build httpx clients over a
MockTransport.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo

import httpx
import pytest

# Sunday 2024-12-29 10:00 UTC
FIXED_NOW = datetime(2024, 12, 29, 10, 0, 0)


class FakeTokenCache:
    """In-memory TokenCache recording the TTL of each write."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        self.values[key] = value
        self.ttls[key] = ttl_seconds
        return True

    async def delete(self, key: str) -> bool:
        self.values.pop(key, None)
        self.ttls.pop(key, None)
        return True


@pytest.fixture
def token_cache() -> FakeTokenCache:
    return FakeTokenCache()


@pytest.fixture
def fixed_now(monkeypatch) -> datetime:
    """Pin "now" for the date parser to FIXED_NOW (UTC wall clock)."""
    from app.utils import date_parser

    def _fake_now(tz: tzinfo | None = None) -> datetime:
        if tz is None:
            return FIXED_NOW
        return FIXED_NOW.replace(tzinfo=timezone.utc).astimezone(tz)

    monkeypatch.setattr(date_parser, "_now", _fake_now)
    return FIXED_NOW


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for AsyncClients whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
