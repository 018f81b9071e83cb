"""
resource-cache — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config, reset_config
from .schemas import (
    CacheConfig,
    LogLevel,
    ResourceCacheConfig,
    StoreConfig,
    StoreConnection,
    StoreFactory,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Main config
    "ResourceCacheConfig",
    # Enums
    "LogLevel",
    # Config sections
    "CacheConfig",
    "StoreConfig",
    "StoreConnection",
    "StoreFactory",
]
