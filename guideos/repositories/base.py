"""
Collection Repository Base

Shared plumbing for the trip and payment repositories: decode a stored
collection into models, write a whole collection back, and the
replace-or-append upsert both collections use.
"""

from typing import Callable, Generic, Optional, TypeVar

from pydantic import ValidationError

from guideos.models.activity import ActivityEventBuilder
from guideos.models.records import Record, new_record_id
from guideos.services.storage import RecordStore


R = TypeVar("R", bound=Record)


class CollectionRepository(Generic[R]):
    """
    Repository over one collection key.

    Every read fetches the full collection from the store and every
    mutation writes the full collection back.
    """

    model: type[R]

    def __init__(
        self,
        store: RecordStore,
        key: str,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._store = store
        self._key = key
        self._new_id = id_factory
        self._activity = store.activity_logger

    @property
    def key(self) -> str:
        return self._key

    def _load(self) -> list[R]:
        records = []
        for index, raw in enumerate(self._store.load(self._key)):
            try:
                records.append(self.model.model_validate(raw))
            except ValidationError as e:
                self._activity.log(
                    ActivityEventBuilder.record_skipped(self._key, index, str(e))
                )
        return records

    def _save(self, records: list[R]) -> bool:
        return self._store.save(self._key, [record.to_storage() for record in records])

    def get(self, record_id: str) -> Optional[R]:
        """Find a record by id."""
        if not record_id:
            return None
        for record in self._load():
            if record.id == record_id:
                return record
        return None

    def _upsert(self, record: R) -> tuple[Optional[R], bool]:
        """
        Replace the record with the same id in place, or append it with a
        freshly minted id.

        Returns:
            (saved_record or None if the write failed, created)
        """
        records = self._load()

        if record.id:
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    return (record if self._save(records) else None), False

        existing_ids = {r.id for r in records}
        new_id = self._new_id()
        while new_id in existing_ids:
            new_id = self._new_id()

        created = record.model_copy(update={"id": new_id})
        records.append(created)
        return (created if self._save(records) else None), True

    def _remove(self, record_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        return self._save(remaining)
