"""
Trip Repository

CRUD over the trip collection, plus the date lookup the calendar uses
and the two list orders the trip screen offers.
"""

import locale
from typing import Callable, Iterable, Optional, Union

from guideos.models.activity import ActivityEventBuilder
from guideos.models.records import new_record_id
from guideos.models.trip import Trip, TripSortKey, TripStatus, parse_trip_date
from guideos.repositories.base import CollectionRepository
from guideos.services.storage import RecordStore


def trip_date_sort_key(trip: Trip) -> tuple:
    """
    Chronological key. Empty or unparsable dates sort after every real
    date; Python's stable sort keeps their relative order.
    """
    parsed = parse_trip_date(trip.date)
    if parsed is None:
        return (1,)
    return (0, parsed)


def trip_client_sort_key(trip: Trip) -> str:
    """
    Locale-aware, case-sensitive collation key for the client name.

    strxfrm rejects NUL, so those characters are dropped from the key.
    """
    return locale.strxfrm(trip.client.replace("\x00", ""))


def sort_trips(trips: Iterable[Trip], key: Union[TripSortKey, str] = TripSortKey.DATE) -> list[Trip]:
    """Sort a trip snapshot by date or by client."""
    sort_key = TripSortKey(key)
    if sort_key is TripSortKey.CLIENT:
        return sorted(trips, key=trip_client_sort_key)
    return sorted(trips, key=trip_date_sort_key)


def trips_matching_date(trips: Iterable[Trip], date_str: str) -> list[Trip]:
    """Trips whose date string equals `date_str` exactly."""
    return [trip for trip in trips if trip.date == date_str]


class TripRepository(CollectionRepository[Trip]):
    """
    Repository for trips.

    Mutations that fail validation are no-ops and return None/False;
    the form upstream is expected to stop them first.
    """

    model = Trip

    def __init__(
        self,
        store: RecordStore,
        key: str = "guideos_trips",
        id_factory: Callable[[], str] = new_record_id,
    ):
        super().__init__(store, key, id_factory)

    def list_trips(self) -> list[Trip]:
        """All trips, in stored order."""
        return self._load()

    def upsert(self, trip: Trip) -> Optional[Trip]:
        """
        Save a trip.

        Replaces the stored trip with the same id, otherwise appends it
        under a new id. Trips without a client or a date are not saved.

        Returns:
            The saved trip (with its id), or None if nothing was saved
        """
        if not trip.client:
            self._activity.log(ActivityEventBuilder.trip_rejected("missing client"))
            return None
        if not trip.date:
            self._activity.log(ActivityEventBuilder.trip_rejected("missing date"))
            return None

        saved, created = self._upsert(trip)
        if saved is not None:
            self._activity.log(
                ActivityEventBuilder.trip_saved(saved.id, saved.client, created)
            )
        return saved

    def add_draft(
        self,
        client: str,
        location: str = "",
        gear: str = "",
        notes: str = "",
    ) -> Optional[Trip]:
        """
        Save an unscheduled Upcoming trip (empty date).

        Used by the trip planner; the guide fills in the date later
        through `upsert`.
        """
        draft = Trip(client=client, location=location, gear=gear, notes=notes)
        if not draft.client:
            self._activity.log(ActivityEventBuilder.trip_rejected("missing client"))
            return None

        saved, _ = self._upsert(draft)
        if saved is not None:
            self._activity.log(ActivityEventBuilder.trip_draft_created(saved.id, saved.client))
        return saved

    def remove(self, trip_id: str) -> bool:
        """
        Delete a trip by id. Payments pointing at it are left alone.

        Returns:
            True if a trip was removed
        """
        removed = self._remove(trip_id)
        if removed:
            self._activity.log(ActivityEventBuilder.trip_deleted(trip_id))
        return removed

    def toggle_status(self, trip_id: str) -> Optional[Trip]:
        """
        Flip Upcoming <-> Completed.

        Returns:
            The updated trip, or None if no trip has that id
        """
        trips = self._load()
        for index, trip in enumerate(trips):
            if trip.id == trip_id:
                updated = trip.model_copy(update={"status": trip.status.toggled()})
                trips[index] = updated
                if not self._save(trips):
                    return None
                self._activity.log(
                    ActivityEventBuilder.trip_status_toggled(trip_id, updated.status.value)
                )
                return updated
        return None

    def trips_on_date(self, date_str: str) -> list[Trip]:
        """Trips scheduled on `date_str` (YYYY-MM-DD)."""
        return trips_matching_date(self._load(), date_str)

    def upcoming(self) -> list[Trip]:
        """Upcoming trips in stored order."""
        return [trip for trip in self._load() if trip.status is TripStatus.UPCOMING]

    def sorted_by(self, key: Union[TripSortKey, str] = TripSortKey.DATE) -> list[Trip]:
        """All trips ordered by `date` or `client`."""
        return sort_trips(self._load(), key)
