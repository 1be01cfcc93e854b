"""Services package."""

from moneymap.services.storage import (
    CorruptDataError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageAdapter,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageAdapter",
    "StorageError",
]
