"""
Data Models Package

This package contains all Pydantic models used in GuideOS.
Every record read from or written to the store goes through these schemas.
"""

from guideos.models.records import Record, new_record_id
from guideos.models.trip import Trip, TripSortKey, TripStatus, parse_trip_date
from guideos.models.payment import (
    Payment,
    PaymentMethod,
    PaymentTotals,
    coerce_amount,
)
from guideos.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Records
    "Record",
    "new_record_id",
    # Trip models
    "Trip",
    "TripSortKey",
    "TripStatus",
    "parse_trip_date",
    # Payment models
    "Payment",
    "PaymentMethod",
    "PaymentTotals",
    "coerce_amount",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
