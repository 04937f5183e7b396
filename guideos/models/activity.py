"""
Activity Models for GuideOS

Every mutation, rejection and fail-open recovery in the core is recorded
as an ActivityEvent and written to the local structured log. Nothing
here is persisted with the collections; the records themselves carry no
history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Trips
    TRIP_SAVED = "trip_saved"
    TRIP_REJECTED = "trip_rejected"
    TRIP_DELETED = "trip_deleted"
    TRIP_STATUS_TOGGLED = "trip_status_toggled"
    TRIP_DRAFT_CREATED = "trip_draft_created"

    # Payments
    PAYMENT_SAVED = "payment_saved"
    PAYMENT_REJECTED = "payment_rejected"
    PAYMENT_DELETED = "payment_deleted"

    # Store
    COLLECTION_LOAD_FAILED = "collection_load_failed"
    RECORD_SKIPPED = "record_skipped"
    COLLECTION_SAVE_FAILED = "collection_save_failed"
    LISTENER_FAILED = "listener_failed"

    # Assistant
    ASSISTANT_REPLIED = "assistant_replied"
    ASSISTANT_REPLY_DROPPED = "assistant_reply_dropped"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What the event is about
    entity_type: Optional[str] = Field(
        default=None,
        description="'trip', 'payment', 'collection' or 'chat'"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.trip_saved(trip_id="...", client="Alice", created=True)
        activity_logger.log(event)
    """

    @staticmethod
    def trip_saved(trip_id: str, client: str, created: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRIP_SAVED,
            entity_type="trip",
            entity_id=trip_id,
            description=f"Trip {'created' if created else 'updated'} for {client}",
            details={"created": created},
        )

    @staticmethod
    def trip_rejected(reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRIP_REJECTED,
            entity_type="trip",
            description="Trip not saved",
            details={"reason": reason},
        )

    @staticmethod
    def trip_deleted(trip_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRIP_DELETED,
            entity_type="trip",
            entity_id=trip_id,
            description="Trip deleted",
        )

    @staticmethod
    def trip_status_toggled(trip_id: str, status: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRIP_STATUS_TOGGLED,
            entity_type="trip",
            entity_id=trip_id,
            description=f"Trip marked {status}",
            details={"status": status},
        )

    @staticmethod
    def trip_draft_created(trip_id: str, client: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRIP_DRAFT_CREATED,
            entity_type="trip",
            entity_id=trip_id,
            description=f"Unscheduled trip draft created for {client}",
        )

    @staticmethod
    def payment_saved(payment_id: str, client: str, amount: str, created: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PAYMENT_SAVED,
            entity_type="payment",
            entity_id=payment_id,
            description=f"Payment {'created' if created else 'updated'} for {client}",
            details={"amount": amount, "created": created},
        )

    @staticmethod
    def payment_rejected(reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PAYMENT_REJECTED,
            entity_type="payment",
            description="Payment not saved",
            details={"reason": reason},
        )

    @staticmethod
    def payment_deleted(payment_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PAYMENT_DELETED,
            entity_type="payment",
            entity_id=payment_id,
            description="Payment deleted",
        )

    @staticmethod
    def collection_load_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COLLECTION_LOAD_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="collection",
            entity_id=key,
            description="Stored collection unreadable, using an empty one",
            error_message=error_message,
        )

    @staticmethod
    def record_skipped(key: str, index: int, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_SKIPPED,
            severity=ActivitySeverity.WARNING,
            entity_type="collection",
            entity_id=key,
            description=f"Malformed record at position {index} skipped",
            details={"index": index},
            error_message=error_message,
        )

    @staticmethod
    def collection_save_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COLLECTION_SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="collection",
            entity_id=key,
            description="Collection could not be written",
            error_message=error_message,
        )

    @staticmethod
    def listener_failed(listener: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LISTENER_FAILED,
            severity=ActivitySeverity.ERROR,
            description="Change listener raised",
            details={"listener": listener},
            error_message=error_message,
        )

    @staticmethod
    def assistant_replied(rule: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ASSISTANT_REPLIED,
            severity=ActivitySeverity.DEBUG,
            entity_type="chat",
            description="Assistant replied",
            details={"rule": rule},
        )

    @staticmethod
    def assistant_reply_dropped() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.ASSISTANT_REPLY_DROPPED,
            severity=ActivitySeverity.DEBUG,
            entity_type="chat",
            description="Chat closed before the reply was delivered",
        )
