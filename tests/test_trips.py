"""Tests for the trip repository."""

import json

import pytest

from guideos.models import Payment, Trip, TripSortKey, TripStatus
from guideos.repositories import TripRepository, sort_trips
from guideos.services.storage import InMemoryBackend, RecordStore


def make_trip(**fields) -> Trip:
    fields.setdefault("client", "Alice")
    fields.setdefault("date", "2024-03-05")
    return Trip(**fields)


class TestTripUpsert:

    def test_create_assigns_id_and_persists(self, trips, backend):
        saved = trips.upsert(make_trip())
        assert saved.id == "id-0001"
        assert [t.id for t in trips.list_trips()] == ["id-0001"]
        assert '"id-0001"' in backend.get("guideos_trips")

    def test_update_replaces_in_place(self, trips):
        first = trips.upsert(make_trip(client="Alice"))
        trips.upsert(make_trip(client="Bob"))
        trips.upsert(first.model_copy(update={"location": "Lake Tahoe"}))

        listed = trips.list_trips()
        assert [t.client for t in listed] == ["Alice", "Bob"]
        assert listed[0].location == "Lake Tahoe"
        assert listed[0].id == first.id

    def test_unknown_id_is_appended_under_new_id(self, trips):
        saved = trips.upsert(make_trip(id="ghost"))
        assert saved.id == "id-0001"
        assert trips.get("ghost") is None

    @pytest.mark.parametrize("fields", [
        {"client": ""},
        {"client": "   "},
        {"date": ""},
        {"client": "", "date": ""},
    ])
    def test_missing_client_or_date_is_a_no_op(self, trips, backend, fields):
        trips.upsert(make_trip(client="Existing"))
        before = backend.get("guideos_trips")

        assert trips.upsert(make_trip(**fields)) is None
        assert backend.get("guideos_trips") == before

    def test_rejected_upsert_does_not_notify(self, trips, store):
        calls = []
        store.subscribe(lambda: calls.append(1))
        trips.upsert(make_trip(client=""))
        assert calls == []

    def test_ids_stay_unique(self, store):
        """Test an id factory that repeats itself cannot create duplicates."""
        ids = iter(["dup", "dup", "dup", "fresh"])
        repo = TripRepository(store, id_factory=lambda: next(ids))
        repo.upsert(make_trip(client="A"))
        repo.upsert(make_trip(client="B"))
        listed = [t.id for t in repo.list_trips()]
        assert listed == ["dup", "fresh"]

    def test_many_upserts_keep_ids_unique(self, trips):
        saved = [trips.upsert(make_trip(client=f"C{i}")) for i in range(10)]
        for trip in saved[::2]:
            trips.upsert(trip.model_copy(update={"notes": "edited"}))
        ids = [t.id for t in trips.list_trips()]
        assert len(ids) == len(set(ids)) == 10

    def test_malformed_stored_record_is_skipped(self):
        raw = '[{"id": "t1", "client": "Alice", "date": "2024-03-05"}, {"id": "t2", "client": ["x"]}]'
        repo = TripRepository(RecordStore(InMemoryBackend({"guideos_trips": raw})))
        assert [t.id for t in repo.list_trips()] == ["t1"]


class TestTripRemove:

    def test_remove(self, trips):
        saved = trips.upsert(make_trip())
        assert trips.remove(saved.id) is True
        assert trips.list_trips() == []

    def test_remove_missing_id_is_a_no_op(self, trips, store):
        trips.upsert(make_trip())
        calls = []
        store.subscribe(lambda: calls.append(1))
        assert trips.remove("nope") is False
        assert len(trips.list_trips()) == 1
        assert calls == []

    def test_remove_does_not_touch_payments(self, trips, payments):
        trip = trips.upsert(make_trip())
        payments.upsert(Payment(client="Alice", amount="100", trip_id=trip.id))

        trips.remove(trip.id)

        stored = payments.list_payments()
        assert len(stored) == 1
        assert stored[0].trip_id == trip.id


class TestToggleStatus:

    def test_toggle_twice_restores_status(self, trips):
        trip = trips.upsert(make_trip(id="t1"))
        toggled = trips.toggle_status(trip.id)
        assert toggled.status == TripStatus.COMPLETED
        assert trips.get(trip.id).status == TripStatus.COMPLETED

        trips.toggle_status(trip.id)
        assert trips.get(trip.id).status == TripStatus.UPCOMING

    def test_toggle_stored_trip_scenario(self):
        """Test a stored Upcoming trip t1 goes Completed, then back."""
        raw = '[{"id": "t1", "date": "2024-03-05", "client": "Alice", "status": "Upcoming"}]'
        repo = TripRepository(RecordStore(InMemoryBackend({"guideos_trips": raw})))
        assert repo.toggle_status("t1").status == TripStatus.COMPLETED
        assert repo.toggle_status("t1").status == TripStatus.UPCOMING

    def test_toggle_missing_id(self, trips):
        assert trips.toggle_status("nope") is None


class TestTripQueries:

    def test_trips_on_date_is_exact_match(self, trips):
        trips.upsert(make_trip(client="A", date="2024-03-05"))
        trips.upsert(make_trip(client="B", date="2024-03-06"))
        trips.upsert(make_trip(client="C", date="2024-03-05"))
        assert [t.client for t in trips.trips_on_date("2024-03-05")] == ["A", "C"]
        assert trips.trips_on_date("2024-3-5") == []

    def test_sorted_by_date(self, trips):
        trips.upsert(make_trip(client="Late", date="2024-05-01"))
        trips.upsert(make_trip(client="Early", date="2024-01-15"))
        trips.upsert(make_trip(client="Mid", date="2024-03-10"))
        assert [t.client for t in trips.sorted_by("date")] == ["Early", "Mid", "Late"]

    def test_undated_and_malformed_dates_sort_last_in_stored_order(self, trips):
        trips.add_draft(client="Draft")
        trips.upsert(make_trip(client="Bad", date="someday"))
        trips.upsert(make_trip(client="Dated", date="2030-01-01"))
        ordered = [t.client for t in trips.sorted_by(TripSortKey.DATE)]
        assert ordered == ["Dated", "Draft", "Bad"]

    def test_sorted_by_client(self, trips):
        for name in ["Carol", "alice", "Bob"]:
            trips.upsert(make_trip(client=name))
        ordered = [t.client for t in trips.sorted_by("client")]
        assert ordered.index("Bob") < ordered.index("Carol")
        assert sorted(ordered) == sorted(["Carol", "alice", "Bob"])

    def test_sorted_by_client_with_nul_in_stored_name(self, backend):
        """Test a NUL character in a stored client name does not break sorting."""
        backend.set("guideos_trips", json.dumps([
            {"id": "t1", "client": "Zed", "date": "2024-03-05"},
            {"id": "t2", "client": "A\u0000b", "date": "2024-03-05"},
        ]))
        ordered = [t.id for t in TripRepository(RecordStore(backend)).sorted_by("client")]
        assert ordered == ["t2", "t1"]

    def test_sort_does_not_reorder_storage(self, trips):
        trips.upsert(make_trip(client="B", date="2024-02-01"))
        trips.upsert(make_trip(client="A", date="2024-01-01"))
        trips.sorted_by("date")
        assert [t.client for t in trips.list_trips()] == ["B", "A"]

    def test_unknown_sort_key_rejected(self):
        with pytest.raises(ValueError):
            sort_trips([], "location")

    def test_upcoming(self, trips):
        done = trips.upsert(make_trip(client="Done"))
        trips.upsert(make_trip(client="Next"))
        trips.toggle_status(done.id)
        assert [t.client for t in trips.upcoming()] == ["Next"]


class TestDrafts:

    def test_draft_has_no_date(self, trips):
        draft = trips.add_draft(client="beginner client", location="Lake Tahoe")
        assert draft.date == ""
        assert draft.status == TripStatus.UPCOMING
        assert trips.get(draft.id).location == "Lake Tahoe"

    def test_draft_needs_client(self, trips):
        assert trips.add_draft(client=" ") is None
        assert trips.list_trips() == []

    def test_scheduling_a_draft_through_upsert(self, trips):
        draft = trips.add_draft(client="family client")
        trips.upsert(draft.model_copy(update={"date": "2024-07-04"}))
        assert trips.trips_on_date("2024-07-04")[0].id == draft.id
        assert len(trips.list_trips()) == 1


class TestCrossViewSync:
    """Two repositories on one store behave like two open views."""

    def test_other_view_rereads_on_signal(self, store):
        writer = TripRepository(store)
        reader = TripRepository(store)
        seen = []
        store.subscribe(lambda: seen.append(len(reader.list_trips())))

        writer.upsert(make_trip())
        writer.upsert(make_trip(client="Bob"))
        assert seen == [1, 2]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
