"""
Record Store

Reads and writes whole named collections (JSON arrays of objects) to a
KeyValueBackend, and broadcasts a ChangeSignal after every successful
write.

CONTRACT:
- load() never raises. Absent, unreadable, unparsable or non-array
  values read as an empty collection; non-object array items are dropped.
- save() never raises. The signal fires only after the backend write
  returned (write-then-notify). A failed write is logged and fires
  nothing.
- Every save is a full-collection rewrite. Concurrent writers follow
  last-write-wins; there is no merging.
"""

import json
from typing import Any, Optional, Sequence

from guideos.activity import ActivityLogger, get_activity_logger
from guideos.models.activity import ActivityEventBuilder
from guideos.services.storage.interface import KeyValueBackend, StorageError
from guideos.services.storage.signal import ChangeSignal, Listener, Subscription


class RecordStore:
    """Collection-level persistence plus change notification."""

    def __init__(
        self,
        backend: KeyValueBackend,
        signal: Optional[ChangeSignal] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._backend = backend
        self._activity = activity_logger or get_activity_logger()
        self._signal = signal or ChangeSignal(self._activity)

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    @property
    def signal(self) -> ChangeSignal:
        return self._signal

    @property
    def activity_logger(self) -> ActivityLogger:
        return self._activity

    def load(self, key: str) -> list[dict[str, Any]]:
        """Read the collection stored under `key`."""
        try:
            raw = self._backend.get(key)
        except (StorageError, ValueError) as e:
            self._activity.log(ActivityEventBuilder.collection_load_failed(key, str(e)))
            return []

        if raw is None or not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            self._activity.log(ActivityEventBuilder.collection_load_failed(key, str(e)))
            return []

        if not isinstance(data, list):
            self._activity.log(
                ActivityEventBuilder.collection_load_failed(
                    key, f"expected a JSON array, found {type(data).__name__}"
                )
            )
            return []

        return [item for item in data if isinstance(item, dict)]

    def save(self, key: str, records: Sequence[dict[str, Any]]) -> bool:
        """
        Replace the collection under `key` and notify subscribers.

        Returns:
            True if the write went through (and the signal fired)
        """
        try:
            payload = json.dumps(list(records), ensure_ascii=False)
            self._backend.set(key, payload)
        except (StorageError, TypeError, ValueError) as e:
            self._activity.log(ActivityEventBuilder.collection_save_failed(key, str(e)))
            return False

        self._signal.emit()
        return True

    def subscribe(self, listener: Listener) -> Subscription:
        """Call `listener` after every successful save, of any collection."""
        return self._signal.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        return self._signal.unsubscribe(listener)
