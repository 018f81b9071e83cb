"""
resource-cache — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import ResourceCacheConfig

logger = logging.getLogger(__name__)

_config_instance: ResourceCacheConfig | None = None


def _store_options_from_env() -> dict[str, Any]:
    """Collect optional redis client options that are set in the environment."""
    options: dict[str, Any] = {}
    if os.getenv("REDIS_DB"):
        options["db"] = int(os.environ["REDIS_DB"])
    if os.getenv("REDIS_PASSWORD"):
        options["password"] = os.environ["REDIS_PASSWORD"]
    if os.getenv("REDIS_SOCKET_TIMEOUT"):
        options["socket_timeout"] = float(os.environ["REDIS_SOCKET_TIMEOUT"])
    return options


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> ResourceCacheConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated ResourceCacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = {
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "cache": {
                "ttl": int(os.getenv("CACHE_TTL", "0")),
                "prefix": os.getenv("CACHE_PREFIX", ""),
                "store": {
                    "kind": "connection",
                    "host": os.getenv("REDIS_HOST", "localhost"),
                    "port": int(os.getenv("REDIS_PORT", "6379")),
                    "options": _store_options_from_env(),
                },
            },
        }
    except ValueError as e:
        logger.error(f"Invalid numeric value in environment: {e}", extra={"error": str(e)})
        raise ConfigurationError(
            f"Invalid numeric value in environment: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = ResourceCacheConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            "Configuration loaded successfully",
            extra={"ttl_ms": _config_instance.cache.ttl, "log_level": _config_instance.log_level},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(include_url=False)},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors(include_url=False)},
        ) from e


def get_config() -> ResourceCacheConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current ResourceCacheConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> ResourceCacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded ResourceCacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """Drop the cached configuration instance. Used by tests."""
    global _config_instance
    _config_instance = None
