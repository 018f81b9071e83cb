"""
resource-cache — Redis Resource Cache

Stores and retrieves JSON-serialized values in Redis with a fixed time-to-live.
"""

__version__ = "1.0.0"

from .cache import Cache, close_all_caches, create_cache, get_cache
from .config import CacheConfig, StoreConnection, StoreFactory
from .errors import (
    CacheError,
    ConfigurationError,
    DeserializationError,
    ResourceCacheError,
    SerializationError,
    StoreError,
)

__all__ = [
    "Cache",
    "create_cache",
    "get_cache",
    "close_all_caches",
    "CacheConfig",
    "StoreConnection",
    "StoreFactory",
    "ResourceCacheError",
    "ConfigurationError",
    "CacheError",
    "StoreError",
    "SerializationError",
    "DeserializationError",
]
