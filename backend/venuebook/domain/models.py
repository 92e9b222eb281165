"""Domain models representing persisted and derived state.

These are pure domain objects with no API input rules.
SQLAlchemy models are in venuebook/models/generated.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .schedule import OperatingConfig
from .timeutils import minutes_to_time


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL

    def can_transition_to(self, target: "ReservationStatus") -> bool:
        return target in _TRANSITIONS.get(self, frozenset())


_TERMINAL = frozenset({
    ReservationStatus.COMPLETED,
    ReservationStatus.CANCELLED,
    ReservationStatus.NO_SHOW,
})

_TRANSITIONS = {
    ReservationStatus.PENDING: frozenset({
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELLED,
    }),
    ReservationStatus.CONFIRMED: frozenset({
        ReservationStatus.CHECKED_IN,
        ReservationStatus.COMPLETED,
        ReservationStatus.CANCELLED,
        ReservationStatus.NO_SHOW,
    }),
    ReservationStatus.CHECKED_IN: frozenset({
        ReservationStatus.COMPLETED,
        ReservationStatus.CANCELLED,
    }),
}


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIAL = "partial"
    REFUNDED = "refunded"


class SlotReason(str, Enum):
    BOOKED = "booked"
    BLOCKED = "blocked"
    CLOSED = "closed"
    PAST = "past"


@dataclass(frozen=True)
class Activity:
    """A bookable item with fixed duration and per-slot capacity."""

    id: int
    organization_id: int
    name: str
    duration_minutes: int
    min_party_size: int
    max_party_size: int
    capacity: int
    price: float
    is_active: bool
    schedule: OperatingConfig


@dataclass(frozen=True)
class Customer:
    id: int
    organization_id: int
    email: str
    full_name: str | None
    phone: str | None


@dataclass(frozen=True)
class CustomerContact:
    """Contact details supplied with a booking request."""

    email: str
    name: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class Reservation:
    """A persisted booking against one slot. Times are minute offsets."""

    id: int
    organization_id: int
    activity_id: int
    customer_id: int
    confirmation_code: str
    date: date
    start: int
    end: int
    party_size: int
    status: ReservationStatus
    payment_status: PaymentStatus
    total_amount: float
    notes: str | None
    cancel_reason: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end)

    @property
    def holds_capacity(self) -> bool:
        return self.status is not ReservationStatus.CANCELLED


@dataclass(frozen=True)
class NewReservation:
    """Reservation row about to be inserted by the booking transaction."""

    organization_id: int
    activity_id: int
    customer_id: int
    confirmation_code: str
    date: date
    start: int
    end: int
    party_size: int
    total_amount: float
    notes: str | None
    created_at: datetime


@dataclass(frozen=True)
class BookingRequest:
    activity_id: int
    date: str | date
    start_time: str
    party_size: int
    customer: CustomerContact
    organization_id: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class TimeSlot:
    """Derived slot state. Computed per query, never stored."""

    start_time: str
    end_time: str
    capacity: int
    remaining_capacity: int
    available: bool
    reason: SlotReason | None = None
