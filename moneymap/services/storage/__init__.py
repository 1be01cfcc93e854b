"""
Storage Services Package

Provides the abstract key-value interface, its implementations, and the
adapter that maps app state onto keys. The local JSON file is the normal
backend; the in-memory store backs tests.
"""

from moneymap.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    StorageError,
)
from moneymap.services.storage.json_file import JsonFileKeyValueStore
from moneymap.services.storage.memory import InMemoryKeyValueStore
from moneymap.services.storage.adapter import StorageAdapter, parse_non_negative

__all__ = [
    # Interfaces
    "KeyValueStore",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Adapter
    "StorageAdapter",
    "parse_non_negative",
]
