"""
resource-cache — Cache Module

- cache.py: Cache facade (get / set / set_nowait / delete)
- serializer.py: JSON payload encode / decode
- interface.py: StoreClient contract
- backends/redis.py: Redis implementation of the store (imported lazily by Cache)
- factory.py: Registry of named cache instances

Usage:
    from resource_cache.cache import create_cache

    cache = create_cache()
    await cache.set("key", {"value": 1})
    value = await cache.get("key")
"""

from .cache import Cache
from .factory import (
    close_all_caches,
    create_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import StoreClient
from .serializer import decode, encode

__all__ = [
    "Cache",
    # Factory functions
    "create_cache",
    "get_cache",
    "close_all_caches",
    "list_cache_instances",
    "reset_cache_factory",
    # Store contract
    "StoreClient",
    # Serializer
    "encode",
    "decode",
]
