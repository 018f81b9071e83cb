"""
resource-cache — Redis Store Tests

Error translation, error channel and close behavior of RedisStore.
"""

import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ResponseError

from resource_cache.cache.backends.redis import RedisStore
from resource_cache.errors import StoreError


class TestRedisStore:
    async def test_read_and_write(self, fake_redis: Any) -> None:
        store = RedisStore(fake_redis)

        await store.write_transaction("k", '{"a":1}', ttl_seconds=10)

        assert await store.read("k") == b'{"a":1}'
        assert 0 < await fake_redis.ttl("k") <= 10

    async def test_write_error_translated(self, fake_redis: Any) -> None:
        store = RedisStore(fake_redis)
        fake_redis.fail_with = ResponseError("EXECABORT")

        with pytest.raises(StoreError) as exc_info:
            await store.write_transaction("k", "1", ttl_seconds=10)

        assert exc_info.value.details["ttl"] == 10
        assert exc_info.value.key == "k"
        assert "EXECABORT" in exc_info.value.message
        assert exc_info.value.to_dict()["error_code"] == "STORE_FAILURE"

    def test_store_error_leaves_details_untouched(self) -> None:
        details = {"error": "boom"}

        error = StoreError("write", "k", details=details)

        assert details == {"error": "boom"}
        assert error.details == {"error": "boom", "operation": "write", "key": "k"}

    def test_emit_reaches_every_listener(self, fake_redis: Any) -> None:
        store = RedisStore(fake_redis)
        first: list[Exception] = []
        second: list[Exception] = []
        store.on_error(first.append)
        store.on_error(second.append)
        error = StoreError("write", "k")

        store.emit_error(error)

        assert first == [error]
        assert second == [error]

    def test_failing_listener_does_not_stop_others(self, fake_redis: Any) -> None:
        store = RedisStore(fake_redis)
        received: list[Exception] = []
        store.on_error(MagicMock(side_effect=RuntimeError("listener bug")))
        store.on_error(received.append)

        store.emit_error(StoreError("write", "k"))

        assert len(received) == 1

    def test_removed_listener_not_called(self, fake_redis: Any, caplog: pytest.LogCaptureFixture) -> None:
        store = RedisStore(fake_redis)
        received: list[Exception] = []
        store.on_error(received.append)
        store.remove_error_listener(received.append)

        with caplog.at_level(logging.ERROR, logger="resource_cache"):
            store.emit_error(StoreError("write", "k"))

        assert received == []
        assert "Unhandled store error" in caplog.text

    async def test_close(self, fake_redis: Any) -> None:
        store = RedisStore(fake_redis)
        await store.close()
        assert fake_redis.closed is True

    async def test_close_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        client = MagicMock()
        client.aclose = AsyncMock(side_effect=ConnectionResetError("gone"))
        store = RedisStore(client)

        with caplog.at_level(logging.ERROR, logger="resource_cache"):
            await store.close()

        assert "Error closing Redis client" in caplog.text
