"""
Payment Models

A payment is a billing record for a client, optionally linked to a trip.

DESIGN DECISION: `amount` keeps the text the guide typed. Aggregates go
through `amount_value`, which reads anything non-numeric as zero, so a
bad stored value never takes the totals down with it.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from guideos.models.records import Record


_ZERO = Decimal("0")


class PaymentMethod(str, Enum):
    """How the client paid."""
    CASH = "Cash"
    STRIPE = "Stripe"  # card payments
    CHECK = "Check"
    VENMO = "Venmo"
    OTHER = "Other"


class Payment(Record):
    """A client payment record."""

    client: str = Field(
        default="",
        description="Client name"
    )
    trip_id: str = Field(
        default="",
        alias="tripId",
        description="Id of the linked trip, empty if unlinked"
    )
    amount: str = Field(
        default="",
        description="Amount as entered"
    )
    paid: bool = False
    method: PaymentMethod = PaymentMethod.CASH

    @field_validator('method', mode='before')
    @classmethod
    def default_unknown_method(cls, v):
        """Unrecognised stored methods read back as Other."""
        if isinstance(v, PaymentMethod):
            return v
        try:
            return PaymentMethod(v)
        except ValueError:
            return PaymentMethod.OTHER

    @property
    def amount_value(self) -> Decimal:
        """Numeric amount; non-numeric or non-finite text counts as zero."""
        return coerce_amount(self.amount)


class PaymentTotals(BaseModel):
    """Sums over a payment collection."""

    total: Decimal = _ZERO
    paid: Decimal = _ZERO
    unpaid: Decimal = _ZERO


def coerce_amount(raw: str) -> Decimal:
    """Read an entered amount as a Decimal, zero when unusable."""
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return _ZERO
    if not value.is_finite():
        return _ZERO
    return value
