"""Repositories package."""

from guideos.repositories.base import CollectionRepository
from guideos.repositories.payments import (
    PaymentRepository,
    display_order,
    resolve_trip,
    summarize_totals,
)
from guideos.repositories.trips import (
    TripRepository,
    sort_trips,
    trip_client_sort_key,
    trip_date_sort_key,
    trips_matching_date,
)

__all__ = [
    "CollectionRepository",
    # Payments
    "PaymentRepository",
    "display_order",
    "resolve_trip",
    "summarize_totals",
    # Trips
    "TripRepository",
    "sort_trips",
    "trip_client_sort_key",
    "trip_date_sort_key",
    "trips_matching_date",
]
