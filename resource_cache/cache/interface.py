"""
resource-cache — Store Interface

Defines the contract the cache facade requires from its backing key-value store.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class StoreClient(ABC):
    """
    Abstract base class for the backing store.

    Implementations raise StoreError for I/O failures. They also own an
    out-of-band error channel used to report failures that have no awaiting
    caller (fire-and-forget writes).
    """

    @abstractmethod
    async def read(self, key: str) -> str | bytes | None:
        """
        Point lookup of a stored payload.

        Args:
            key: Store key

        Returns:
            Raw payload, or None if the key is missing or expired
        """

    @abstractmethod
    async def write_transaction(self, key: str, payload: str, ttl_seconds: int) -> None:
        """
        Atomically store a payload and set its expiration.

        Both effects are applied together or not at all.

        Args:
            key: Store key
            payload: Serialized value
            ttl_seconds: Expiration in whole seconds
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a key. Deleting a missing key is not an error.

        Args:
            key: Store key
        """

    @abstractmethod
    def emit_error(self, error: Exception) -> None:
        """
        Report an error on the out-of-band error channel.

        Args:
            error: Error with no caller to propagate to
        """

    @abstractmethod
    def on_error(self, listener: Callable[[Exception], None]) -> None:
        """Subscribe a listener to the error channel."""

    @abstractmethod
    def remove_error_listener(self, listener: Callable[[Exception], None]) -> None:
        """Unsubscribe a listener from the error channel."""

    @abstractmethod
    async def close(self) -> None:
        """
        Close the store client and release its connections.

        Should be called during graceful shutdown.
        """
