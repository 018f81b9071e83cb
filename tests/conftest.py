"""
resource-cache — Test Configuration and Shared Fixtures

Provides an in-memory fake of the redis asyncio client for unit tests and a
real Redis client (database 15) for integration tests.
"""

import math
import os
import time
from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any

import pytest
import pytest_asyncio
from redis.asyncio import Redis

from resource_cache.cache import Cache

os.environ["LOG_LEVEL"] = "DEBUG"

TEST_REDIS_HOST = os.environ.get("TEST_REDIS_HOST", "localhost")
TEST_REDIS_PORT = int(os.environ.get("TEST_REDIS_PORT", "6379"))
TEST_REDIS_DB = 15


class FakePipeline:
    """Buffered MULTI/EXEC pipeline of FakeRedis."""

    def __init__(self, redis: "FakeRedis", transaction: bool) -> None:
        self._redis = redis
        self.transaction = transaction
        self._commands: list[tuple[str, tuple[Any, ...]]] = []

    def set(self, name: str, value: str | bytes) -> "FakePipeline":
        self._commands.append(("set", (name, value)))
        return self

    def expire(self, name: str, time: int) -> "FakePipeline":
        self._commands.append(("expire", (name, time)))
        return self

    async def execute(self) -> list[Any]:
        commands, self._commands = self._commands, []
        self._redis.calls.append(("exec", tuple(commands)))
        self._redis.raise_if_failing()
        return [getattr(self._redis, f"_{name}")(*args) for name, args in commands]


class FakeRedis:
    """
    In-memory stand-in for redis.asyncio.Redis.

    Records every command in `calls`. Setting `fail_with` makes every
    subsequent command raise that exception.
    """

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.expires_at: dict[str, float] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_with: Exception | None = None
        self.closed = False

    def raise_if_failing(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _purge(self, name: str) -> None:
        deadline = self.expires_at.get(name)
        if deadline is not None and deadline <= time.monotonic():
            self.data.pop(name, None)
            self.expires_at.pop(name, None)

    def _set(self, name: str, value: str | bytes) -> bool:
        self.data[name] = value.encode("utf-8") if isinstance(value, str) else value
        self.expires_at.pop(name, None)
        return True

    def _expire(self, name: str, seconds: int) -> bool:
        self._purge(name)
        if name not in self.data:
            return False
        self.expires_at[name] = time.monotonic() + seconds
        return True

    async def get(self, name: str) -> bytes | None:
        self.calls.append(("get", name))
        self.raise_if_failing()
        self._purge(name)
        return self.data.get(name)

    async def delete(self, *names: str) -> int:
        self.calls.append(("delete", *names))
        self.raise_if_failing()
        removed = 0
        for name in names:
            self._purge(name)
            if self.data.pop(name, None) is not None:
                removed += 1
            self.expires_at.pop(name, None)
        return removed

    async def ttl(self, name: str) -> int:
        self._purge(name)
        if name not in self.data:
            return -2
        if name not in self.expires_at:
            return -1
        return math.ceil(self.expires_at[name] - time.monotonic())

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        self.calls.append(("pipeline", transaction))
        return FakePipeline(self, transaction)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Fresh fake redis client."""
    return FakeRedis()


@pytest.fixture
def make_cache(fake_redis: FakeRedis) -> Callable[..., Cache]:
    """Build a Cache whose store factory returns the fake redis client."""

    def _make(**options: Any) -> Cache:
        options.setdefault("store", lambda: fake_redis)
        return Cache(**options)

    return _make


@pytest.fixture
def sample_values() -> dict[str, Any]:
    """Values covering the supported JSON domain."""
    return {
        "string": "hello",
        "unicode": "Hello 世界 🌍 Ñoño café",
        "int": 42,
        "float": 3.14,
        "bool": True,
        "list": [1, "two", 3.0, None],
        "dict": {"nested": {"key": "value", "number": 123, "list": [1, 2, 3]}},
        "records": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
    }


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[Redis, None]:
    """
    Create a Redis client for integration tests.

    Skips the test if Redis is not available.
    Clears the test database before and after each test.
    """
    client = Redis(host=TEST_REDIS_HOST, port=TEST_REDIS_PORT, db=TEST_REDIS_DB)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis not available for testing: {e}")

    await client.flushdb()

    yield client

    try:
        await client.flushdb()
    finally:
        await client.aclose()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every environment variable read by the config loader."""
    for name in (
        "CACHE_TTL",
        "CACHE_PREFIX",
        "REDIS_HOST",
        "REDIS_PORT",
        "REDIS_DB",
        "REDIS_PASSWORD",
        "REDIS_SOCKET_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_registries() -> Generator[None, None, None]:
    """Reset cache factory and config singletons after each test."""
    yield
    from resource_cache.cache.factory import reset_cache_factory
    from resource_cache.config import reset_config

    reset_cache_factory()
    reset_config()
