"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Keep data in a local JSON file for normal use
2. Use in-memory storage for testing
3. Keep the expense logic unaware of where bytes end up

The interface is intentionally tiny - string keys, string values.
Serialization of expenses and settings happens one level up, in the
storage adapter.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a durable local key-value store.

    Values are opaque strings. Implementations must make each
    set_item/remove_item durable before returning.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Entry name

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored bytes exist but cannot be parsed."""
    pass
