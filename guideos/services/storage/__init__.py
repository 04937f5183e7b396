"""
Storage Services Package

Provides the key-value backend interface, its in-memory and file
implementations, and the RecordStore that reads and writes collections
on top of them.
"""

from guideos.services.storage.interface import (
    KeyValueBackend,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from guideos.services.storage.backends import InMemoryBackend, JsonFileBackend
from guideos.services.storage.signal import ChangeSignal, Listener, Subscription
from guideos.services.storage.record_store import RecordStore

__all__ = [
    # Interfaces
    "KeyValueBackend",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Backends
    "InMemoryBackend",
    "JsonFileBackend",
    # Store and signal
    "ChangeSignal",
    "Listener",
    "RecordStore",
    "Subscription",
]
