"""
Abstract Storage Interface

DESIGN DECISION: The store only needs a flat string-keyed space, the
same shape as browser local storage. Keeping the backend this small
means:
1. Tests run on a dict
2. The desktop build writes one JSON file per collection
3. Encoding, fail-open reads and change notification live in the
   RecordStore, once, not in every backend
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueBackend(ABC):
    """
    Abstract interface for the durable key-value space.

    Any backend must implement these methods. Backends raise
    StorageError on failure; they never swallow errors themselves.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under `key`.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the value exists but cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store `value` under `key`, replacing any previous value.

        The write is complete when this returns.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Delete `key`.

        Returns:
            True if a value was removed, False if the key was absent
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written."""
    pass


class StorageReadError(StorageError):
    """A stored value exists but could not be read."""
    pass
