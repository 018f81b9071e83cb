"""
resource-cache — Cache Factory

Registry of named Cache instances. Each instance owns one long-lived store
connection, so processes normally create a cache once at startup and look it
up by name afterwards.

Examples:
    from resource_cache.cache.factory import create_cache, get_cache

    # Uses env-configured settings (CACHE_TTL, REDIS_HOST, ...)
    cache = create_cache()

    # Or explicitly supply a CacheConfig (e.g., for tests)
    from resource_cache.config import CacheConfig
    sessions = create_cache(CacheConfig(ttl=30_000, prefix="session:"), name="sessions")
"""

from __future__ import annotations

import logging

from ..config import CacheConfig, get_config
from .cache import Cache

logger = logging.getLogger(__name__)

# Global cache instances registry
_cache_instances: dict[str, Cache] = {}


def create_cache(
    config: CacheConfig | None = None,
    name: str = "default",
) -> Cache:
    """
    Create a cache instance, or return the one already registered under name.

    Args:
        config: Cache configuration (uses global config if not provided)
        name: Cache instance name

    Returns:
        Configured Cache instance

    Raises:
        ConfigurationError: If configuration is invalid or redis is unavailable
    """
    if name in _cache_instances:
        logger.debug("Returning existing cache instance: %s", name)
        return _cache_instances[name]

    if config is None:
        config = get_config().cache

    logger.info(
        "Creating cache instance '%s'",
        name,
        extra={"cache_name": name, "ttl_ms": config.ttl, "store_kind": config.store.kind},
    )

    cache = Cache(config)
    _cache_instances[name] = cache
    return cache


def get_cache(name: str = "default") -> Cache:
    """
    Get an existing cache instance by name.

    If the instance doesn't exist, it is created from the global configuration.
    """
    if name not in _cache_instances:
        logger.debug("Cache instance '%s' not found, creating new instance", name)
        return create_cache(name=name)

    return _cache_instances[name]


async def close_all_caches() -> None:
    """
    Close all cache instances and release their store connections.

    Should be called during graceful shutdown.
    """
    if not _cache_instances:
        logger.debug("No cache instances to close")
        return

    logger.info("Closing %d cache instance(s)...", len(_cache_instances))

    for name, cache in list(_cache_instances.items()):
        try:
            await cache.close()
            logger.info("Closed cache instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing cache instance '%s': %s",
                name,
                e,
                extra={"cache_name": name, "error": str(e)},
                exc_info=True,
            )

    _cache_instances.clear()


def reset_cache_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_cache_instances)
    _cache_instances.clear()
    logger.debug("Reset cache factory, cleared %d instance reference(s)", count)


def list_cache_instances() -> list[str]:
    """List all registered cache instance names."""
    return list(_cache_instances.keys())
