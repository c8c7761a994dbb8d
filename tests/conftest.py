"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests,
including an in-memory fake shard served through httpx.MockTransport.
"""

import time
from collections import OrderedDict
from typing import Any, AsyncGenerator, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

from hexodb.client.database import Database
from hexodb.protocol.builder import RequestBuilder
from hexodb.protocol.interpreter import ResponseInterpreter

SHARD_URL = "https://shard.test/"


# ============================================================================
# Fake Shard
# ============================================================================

class FakeShard:
    """
    In-memory stand-in for a HexoDB shard.

    Speaks the shard URL protocol and records every request it receives so
    tests can assert how many network calls an operation made.

    Attributes:
        requests: Every httpx.Request handled, in order
        clock_offset_ms: Added to the reported server time (latency)
        fail_status: When set, every request answers with this status
        raw_body: When set, every request answers with this body verbatim
    """

    def __init__(self):
        self._store: "OrderedDict[str, Any]" = OrderedDict()
        self.requests: List[httpx.Request] = []
        self.clock_offset_ms = 0
        self.fail_status: Optional[int] = None
        self.raw_body: Optional[bytes] = None

    def seed(self, key: str, data: Any) -> None:
        """Store a value directly, bypassing the client."""
        self._store[key] = data

    def peek(self, key: str) -> Any:
        return self._store.get(key)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_status is not None:
            return httpx.Response(self.fail_status, text="shard error")
        if self.raw_body is not None:
            return httpx.Response(200, content=self.raw_body)

        query = request.url.query.decode()
        path = request.url.path

        if path == "/set":
            key, _, value = query.partition("=")
            self._store[unquote(key)] = unquote(value)
            return httpx.Response(200, json={"operation": "success"})

        if path == "/delete":
            self._store.pop(unquote(query), None)
            return httpx.Response(200, json={"operation": "success"})

        if path == "/fetch":
            key = unquote(query)
            if key not in self._store:
                return httpx.Response(200, json={})
            return httpx.Response(200, json={"data": self._store[key]})

        if path == "/fetchall":
            body = [{"key": key, "data": data} for key, data in self._store.items()]
            return httpx.Response(200, json=body)

        if path == "/latency":
            now_ms = int(time.time() * 1000) + self.clock_offset_ms
            return httpx.Response(200, json={"ping": str(now_ms)})

        return httpx.Response(404, text="not found")


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def builder() -> RequestBuilder:
    """Create a RequestBuilder for the test shard URL."""
    return RequestBuilder(SHARD_URL)


@pytest.fixture
def interpreter() -> ResponseInterpreter:
    """Create a ResponseInterpreter instance."""
    return ResponseInterpreter()


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture
def shard() -> FakeShard:
    """Create an empty fake shard."""
    return FakeShard()


@pytest_asyncio.fixture
async def db(shard: FakeShard) -> AsyncGenerator[Database, None]:
    """
    Create a Database wired to the fake shard.

    The underlying httpx client is closed after the test.
    """
    database = Database(SHARD_URL, transport=httpx.MockTransport(shard.handle))

    yield database

    await database.aclose()


@pytest.fixture
def sample_snapshot() -> Dict[str, Any]:
    """Entries with nested numeric scores, in shard order."""
    return {
        "apple": {"score": 3},
        "banana": {"score": 1},
        "avocado": {"score": 2},
        "apricot": {"score": 3},
    }
