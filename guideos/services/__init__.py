"""Services package."""

from guideos.services.storage import (
    ChangeSignal,
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    RecordStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
    Subscription,
)

__all__ = [
    "ChangeSignal",
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
    "RecordStore",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "Subscription",
]
