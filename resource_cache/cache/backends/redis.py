"""
resource-cache — Redis Store

StoreClient implementation over a redis-py asyncio client:
- GET for reads
- MULTI / SET / EXPIRE / EXEC transaction for writes
- DEL for deletes
- Client failures translated to StoreError (original chained as __cause__)
- Listener-based error channel for fire-and-forget failures

The redis package is only imported by from_connection. A store wrapping a
caller-supplied client works without it.

Example:
    store = RedisStore.from_connection("localhost", 6379, {"db": 0})
    await store.write_transaction("greeting", '{"msg":"hello"}', ttl_seconds=60)
    payload = await store.read("greeting")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ...errors import StoreError
from ..interface import StoreClient

logger = logging.getLogger(__name__)


class RedisStore(StoreClient):
    """
    Redis-backed store.

    The wrapped client connects lazily on its first command; nothing is
    awaited at construction.
    """

    def __init__(self, client: Any) -> None:
        """
        Initialize the store around a ready client.

        Args:
            client: A redis.asyncio.Redis instance (or a compatible client)
        """
        self._client = client
        self._error_listeners: list[Callable[[Exception], None]] = []

    @classmethod
    def from_connection(cls, host: str, port: int, options: dict[str, Any] | None = None) -> RedisStore:
        """
        Build a store from connection parameters.

        Args:
            host: Redis host
            port: Redis port
            options: Extra client options, passed verbatim (db, password, socket_timeout, ...)

        Raises:
            ImportError: redis-py is not installed
        """
        # redis-py asyncio client (v4.2+)
        from redis.asyncio import Redis

        client = Redis(host=host, port=port, **(options or {}))
        return cls(client)

    @property
    def client(self) -> Any:
        """The underlying redis client."""
        return self._client

    # ------------ Core Interface ------------

    async def read(self, key: str) -> str | bytes | None:
        """Fetch the raw payload stored under key."""
        try:
            return await self._client.get(key)
        except Exception as e:
            logger.error(
                f"Failed to read key '{key}' from Redis: {e}",
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            raise StoreError("read", key, details={"error": str(e)}) from e

    async def write_transaction(self, key: str, payload: str, ttl_seconds: int) -> None:
        """Store payload and expiration in one MULTI/EXEC transaction."""
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.set(key, payload)
            pipe.expire(key, ttl_seconds)
            await pipe.execute()
        except Exception as e:
            logger.error(
                f"Failed to write key '{key}' to Redis: {e}",
                extra={"key": key, "ttl": ttl_seconds, "error": str(e)},
                exc_info=True,
            )
            raise StoreError("write", key, details={"ttl": ttl_seconds, "error": str(e)}) from e

    async def delete(self, key: str) -> None:
        """Delete a single key."""
        try:
            await self._client.delete(key)
        except Exception as e:
            logger.error(
                f"Failed to delete key '{key}' from Redis: {e}",
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            raise StoreError("delete", key, details={"error": str(e)}) from e

    # ------------ Error channel ------------

    def on_error(self, listener: Callable[[Exception], None]) -> None:
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: Callable[[Exception], None]) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    def emit_error(self, error: Exception) -> None:
        """
        Deliver error to every listener.

        With no listener subscribed, the error is logged instead of dropped.
        """
        if not self._error_listeners:
            logger.error(
                f"Unhandled store error: {error}",
                extra={"error": str(error), "error_type": type(error).__name__},
                exc_info=error,
            )
            return

        for listener in list(self._error_listeners):
            try:
                listener(error)
            except Exception as e:
                logger.error(f"Store error listener failed: {e}", extra={"error": str(e)}, exc_info=True)

    async def close(self) -> None:
        """Close the Redis client and release its connection pool."""
        try:
            await self._client.aclose()
            logger.info("Closed Redis store client")
        except Exception as e:
            logger.error(f"Error closing Redis client: {e}", extra={"error": str(e)}, exc_info=True)
