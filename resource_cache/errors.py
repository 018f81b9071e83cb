"""
resource-cache — Error Types

Defines the exception hierarchy for the cache facade.
All exceptions inherit from ResourceCacheError for consistent error handling.

Taxonomy:
- ConfigurationError: fatal, raised at construction / configuration load
- CacheError: per-call, recoverable
  - StoreError: backing store I/O failure (read, write, delete)
  - SerializationError: value cannot be encoded to a payload
  - DeserializationError: stored payload cannot be decoded
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes carried by every ResourceCacheError."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CACHE_FAILURE = "CACHE_FAILURE"
    STORE_FAILURE = "STORE_FAILURE"
    SERIALIZATION_FAILURE = "SERIALIZATION_FAILURE"
    DESERIALIZATION_FAILURE = "DESERIALIZATION_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ResourceCacheError(Exception):
    """Base exception for all resource-cache errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary (logging, API responses)."""
        return {
            "error": self.__class__.__name__,
            "error_code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ResourceCacheError):
    """Raised when configuration is invalid or a required dependency is missing."""

    code = ErrorCode.CONFIGURATION_ERROR


class CacheError(ResourceCacheError):
    """Base exception for per-call cache errors."""

    code = ErrorCode.CACHE_FAILURE


class StoreError(CacheError):
    """Raised when the backing store fails a read, write or delete."""

    code = ErrorCode.STORE_FAILURE

    def __init__(self, operation: str, key: str, details: dict[str, Any] | None = None):
        error_details = dict(details or {})
        error_details.update({"operation": operation, "key": key})
        message = f"Store {operation} failed for key '{key}'"
        if "error" in error_details:
            message += f": {error_details['error']}"
        super().__init__(message, error_details)
        self.operation = operation
        self.key = key


class SerializationError(CacheError):
    """Raised when a value cannot be encoded into a storage payload."""

    code = ErrorCode.SERIALIZATION_FAILURE


class DeserializationError(CacheError):
    """Raised when a stored payload is malformed and cannot be decoded."""

    code = ErrorCode.DESERIALIZATION_FAILURE
