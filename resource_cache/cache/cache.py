"""
resource-cache — Cache Facade

Stores and retrieves JSON-serialized values in Redis with a fixed TTL.

Rules:
- Empty keys are a no-op: get returns None, set/delete do nothing
- A TTL of 0 (the default) disables writes entirely
- Store and decode errors propagate to the awaiting caller
- Fire-and-forget writes (set_nowait) report failures on the store's error channel

Usage:
    cache = Cache(ttl=60_000, store={"host": "localhost", "port": 6379})
    await cache.set("mykey", {"foo": "bar"})
    value = await cache.get("mykey")
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from pydantic import ValidationError

from ..config import CacheConfig, StoreConfig, StoreFactory
from ..errors import ConfigurationError
from .interface import StoreClient
from .serializer import decode, encode

logger = logging.getLogger(__name__)


class Cache:
    """
    Single-backend cache facade over a Redis store.

    Attributes:
        ttl: Effective time-to-live in whole seconds (ceiling of the configured milliseconds)
        prefix: Prefix prepended to every store key
        store: Backing StoreClient, owner of the out-of-band error channel
    """

    def __init__(self, config: CacheConfig | None = None, **options: Any) -> None:
        """
        Create a cache.

        Args:
            config: Cache configuration; built from options when omitted
            **options: CacheConfig fields (ttl, prefix, store)

        Raises:
            ConfigurationError: Invalid options, or the redis client library is unavailable
        """
        if config is None:
            try:
                config = CacheConfig(**options)
            except ValidationError as e:
                raise ConfigurationError(
                    "Invalid cache options",
                    details={"validation_errors": e.errors(include_url=False)},
                ) from e

        self.ttl = math.ceil(config.ttl / 1000)
        self.prefix = config.prefix
        self.store = self._create_store(config.store)
        self._pending: set[asyncio.Task[None]] = set()

        logger.debug(
            "Cache created",
            extra={"ttl_seconds": self.ttl, "prefix": self.prefix, "store_kind": config.store.kind},
        )

    # ------------ Helpers ------------

    @staticmethod
    def _create_store(store_config: StoreConfig) -> StoreClient:
        """
        Obtain the store client from either construction strategy.

        A supplied factory is called as-is; only connection parameters need
        the redis client library.
        """
        from .backends.redis import RedisStore

        if isinstance(store_config, StoreFactory):
            return RedisStore(store_config.factory())

        try:
            return RedisStore.from_connection(store_config.host, store_config.port, store_config.options)
        except ImportError as e:
            logger.error(
                "Redis client library is not installed",
                extra={"package": "redis>=5.0.0", "error": str(e)},
            )
            raise ConfigurationError(
                "You must install redis to use the cache. Install with: pip install 'redis>=5.0.0'",
                details={"package": "redis>=5.0.0", "error": str(e)},
            ) from e

    def _make_key(self, key: str) -> str:
        """Create prefixed store key."""
        return f"{self.prefix}{key}"

    # ------------ Operations ------------

    async def get(self, key: str | None) -> Any | None:
        """
        Retrieve a value.

        Returns:
            The decoded value, or None if key is empty, missing or expired

        Raises:
            StoreError: Store read failed
            DeserializationError: Stored payload is malformed
        """
        if not key:
            return None

        payload = await self.store.read(self._make_key(key))
        return decode(payload)

    async def set(self, key: str | None, value: Any) -> None:
        """
        Store a value for ttl seconds. No-op when key is empty or ttl is 0.

        Raises:
            SerializationError: Value cannot be encoded
            StoreError: Transactional write failed
        """
        if not key or not self.ttl:
            return

        payload = encode(value)
        await self.store.write_transaction(self._make_key(key), payload, self.ttl)

    def set_nowait(self, key: str | None, value: Any) -> asyncio.Task[None] | None:
        """
        Schedule a write without awaiting it.

        Failures of the write itself are never raised; each is emitted once on
        the store's error channel. No-op writes need no event loop.

        Returns:
            The background task, or None when the write is a no-op

        Raises:
            RuntimeError: A real write was requested outside a running event loop
        """
        if not key or not self.ttl:
            return None

        task = asyncio.get_running_loop().create_task(self._set_and_report(key, value))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _set_and_report(self, key: str, value: Any) -> None:
        try:
            await self.set(key, value)
        except Exception as e:
            self.store.emit_error(e)

    async def delete(self, key: str | None) -> None:
        """
        Delete a value. No-op when key is empty.

        Raises:
            StoreError: Store delete failed
        """
        if not key:
            return

        await self.store.delete(self._make_key(key))

    async def close(self) -> None:
        """Wait for background writes, then close the store client."""
        if self._pending:
            logger.debug("Waiting for %d pending write(s)", len(self._pending))
            await asyncio.gather(*self._pending, return_exceptions=True)
        await self.store.close()
