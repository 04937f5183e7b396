"""
Payment Repository

CRUD over the payment collection, the paid/unpaid totals, the display
order of the payment list and trip linkage lookups.

DESIGN DECISION: Trip links are resolved against whatever trip snapshot
the caller holds. A link that resolves to nothing is simply "no trip";
deleting a trip never edits payments.
"""

from decimal import Decimal
from typing import Callable, Iterable, Optional

from guideos.models.activity import ActivityEventBuilder
from guideos.models.payment import Payment, PaymentTotals
from guideos.models.records import new_record_id
from guideos.models.trip import Trip
from guideos.repositories.base import CollectionRepository
from guideos.services.storage import RecordStore


def display_order(payments: Iterable[Payment]) -> list[Payment]:
    """
    Unpaid before paid; within each group, id descending.

    Ids are time-based, so this approximates newest first.
    """
    by_id_desc = sorted(payments, key=lambda p: p.id, reverse=True)
    return sorted(by_id_desc, key=lambda p: p.paid)


def summarize_totals(payments: Iterable[Payment]) -> PaymentTotals:
    """Sum amounts across all, paid and unpaid payments."""
    total = Decimal("0")
    paid = Decimal("0")
    for payment in payments:
        amount = payment.amount_value
        total += amount
        if payment.paid:
            paid += amount
    return PaymentTotals(total=total, paid=paid, unpaid=total - paid)


def resolve_trip(payment: Payment, trips: Iterable[Trip]) -> Optional[Trip]:
    """The trip `payment` points at, or None for empty/dangling links."""
    if not payment.trip_id:
        return None
    for trip in trips:
        if trip.id == payment.trip_id:
            return trip
    return None


class PaymentRepository(CollectionRepository[Payment]):
    """Repository for payments."""

    model = Payment

    def __init__(
        self,
        store: RecordStore,
        key: str = "guideos_payments",
        id_factory: Callable[[], str] = new_record_id,
    ):
        super().__init__(store, key, id_factory)

    def list_payments(self) -> list[Payment]:
        """All payments, in stored order."""
        return self._load()

    def upsert(self, payment: Payment) -> Optional[Payment]:
        """
        Save a payment.

        Replaces the stored payment with the same id, otherwise appends
        it under a new id. Payments without a client or an amount are not
        saved.
        """
        if not payment.client:
            self._activity.log(ActivityEventBuilder.payment_rejected("missing client"))
            return None
        if not payment.amount:
            self._activity.log(ActivityEventBuilder.payment_rejected("missing amount"))
            return None

        saved, created = self._upsert(payment)
        if saved is not None:
            self._activity.log(
                ActivityEventBuilder.payment_saved(saved.id, saved.client, saved.amount, created)
            )
        return saved

    def remove(self, payment_id: str) -> bool:
        """Delete a payment by id. Returns True if one was removed."""
        removed = self._remove(payment_id)
        if removed:
            self._activity.log(ActivityEventBuilder.payment_deleted(payment_id))
        return removed

    def unpaid(self) -> list[Payment]:
        """Payments not yet received, in stored order."""
        return [payment for payment in self._load() if not payment.paid]

    def totals(self) -> PaymentTotals:
        return summarize_totals(self._load())

    def sorted_for_display(self, unpaid_only: bool = False) -> list[Payment]:
        """The payment list as shown: unpaid first, newest first."""
        payments = self.unpaid() if unpaid_only else self._load()
        return display_order(payments)

    def linked_trip(self, payment: Payment, trips: Iterable[Trip]) -> Optional[Trip]:
        return resolve_trip(payment, trips)

    def for_trip(self, trip_id: str) -> Optional[Payment]:
        """First stored payment linked to `trip_id`, if any."""
        if not trip_id:
            return None
        for payment in self._load():
            if payment.trip_id == trip_id:
                return payment
        return None
