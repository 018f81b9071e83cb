"""
resource-cache — Observability Module

Structured JSON logging for the package.

Usage:
    from resource_cache.config import get_config
    from resource_cache.observability import configure_logging

    configure_logging(get_config().log_level)
"""

from .logging import JSONFormatter, configure_logging

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
