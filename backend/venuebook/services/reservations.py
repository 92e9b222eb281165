# backend/venuebook/services/reservations.py
"""
Booking transaction and reservation lifecycle.

create_booking():
  Requested → Validated → CustomerResolved → Persisted (pending)

  Validated re-runs availability for the day (narrows the race window),
  Persisted re-checks capacity under a row lock inside the store
  (closes it). Customer creation and the insert share one DB
  transaction: nothing is committed if either fails.

Lifecycle:
  pending    → confirmed (payment succeeded) | cancelled
  confirmed  → checked-in | completed | cancelled | no-show
  checked-in → completed | cancelled
  completed, cancelled, no-show are terminal.

reschedule_booking() moves a non-terminal reservation to another slot;
the store re-sums capacity without the reservation itself.

Notifications are fire-and-forget; failures never roll back a reservation.
"""

import logging
import secrets
import string
from datetime import date, datetime, timedelta
from typing import Callable

from ..domain import (
    Activity,
    BookingRequest,
    CapacityExceededError,
    Customer,
    CustomerContact,
    FormatError,
    InvalidTransitionError,
    NewReservation,
    PartySizeError,
    PaymentStatus,
    Reservation,
    ReservationNotFoundError,
    ReservationStatus,
    SlotNotFoundError,
    SlotReason,
    SlotUnavailableError,
)
from ..domain.timeutils import MINUTES_PER_DAY, minutes_to_time, parse_date, time_to_minutes
from ..stores.interfaces import BookingStore
from .events import Notifier
from .slots.availability import AvailabilityService
from .slots.config import BookingConfig, get_booking_config

logger = logging.getLogger(__name__)

CODE_PREFIX = "BK-"
CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8


def normalize_email(email: str) -> str:
    """Trim and lower-case; customers are unique per organization on this value."""
    normalized = (email or "").strip().lower()
    local, _, domain = normalized.partition("@")
    if not local or "." not in domain or " " in normalized:
        raise FormatError(f"Invalid email {email!r}")
    return normalized


def parse_start_time(value: str) -> int:
    """Parse a slot start. "24:00" is a closing time only, never a start."""
    start = time_to_minutes(value)
    if start >= MINUTES_PER_DAY:
        raise FormatError(f"Invalid start time {value!r}, expected 00:00-23:59")
    return start


def generate_confirmation_code() -> str:
    return CODE_PREFIX + "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


class BookingService:
    """Creates reservations and drives their status changes."""

    def __init__(
        self,
        store: BookingStore,
        notifier: Notifier,
        availability: AvailabilityService | None = None,
        config: BookingConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._config = config or get_booking_config()
        self._clock = clock or self._config.now
        self._availability = availability or AvailabilityService(store, self._config, self._clock)

    # ── Booking transaction ──────────────────────────────────────────────

    def create_booking(self, request: BookingRequest) -> Reservation:
        """
        Reserve a slot for the request.

        Raises:
            FormatError: Malformed date, time or email.
            ActivityNotFoundError: Unknown or cross-tenant activity.
            PartySizeError: Party size outside the activity limits.
            SlotNotFoundError: Start time not on the slot grid.
            SlotUnavailableError: Slot closed, blocked or past.
            CapacityExceededError: Not enough places left.
            PersistenceError: Storage failure (retry the whole request).
        """
        # Requested: reject malformed input before touching persistence
        target_date = parse_date(request.date)
        start = parse_start_time(request.start_time)
        start_time = minutes_to_time(start)
        email = normalize_email(request.customer.email)

        activity = self._availability.load_activity(request.activity_id, request.organization_id)

        if not activity.min_party_size <= request.party_size <= activity.max_party_size:
            raise PartySizeError(request.party_size, activity.min_party_size, activity.max_party_size)

        # Validated
        self._check_slot(activity, target_date, start, request.party_size)

        # CustomerResolved + Persisted
        now = self._clock()
        with self._store.transaction():
            customer = self._resolve_customer(activity.organization_id, email, request.customer)
            reservation = self._store.insert_reservation(
                NewReservation(
                    organization_id=activity.organization_id,
                    activity_id=activity.id,
                    customer_id=customer.id,
                    confirmation_code=generate_confirmation_code(),
                    date=target_date,
                    start=start,
                    end=start + activity.duration_minutes,
                    party_size=request.party_size,
                    total_amount=round(activity.price * request.party_size, 2),
                    notes=request.notes,
                    created_at=now,
                ),
                capacity=activity.capacity,
            )

        logger.info(
            f"Reservation created: reservation_id={reservation.id}, "
            f"code={reservation.confirmation_code}, activity={activity.id}, "
            f"time={target_date.isoformat()} {start_time}, party={request.party_size}"
        )
        self._notify("booking_created", reservation)
        return reservation

    def _check_slot(
        self,
        activity: Activity,
        target_date: date,
        start: int,
        party_size: int,
        exclude_reservation_id: int | None = None,
    ) -> None:
        """Match `start` against the day's grid by minute offset and check room."""
        start_time = minutes_to_time(start)
        slots = self._availability.slots_for(activity, target_date, exclude_reservation_id)
        slot = next((s for s in slots if time_to_minutes(s.start_time) == start), None)
        if slot is None:
            raise SlotNotFoundError(start_time)
        if not slot.available:
            if slot.reason is SlotReason.BOOKED:
                raise CapacityExceededError(requested=party_size, remaining=0)
            raise SlotUnavailableError(start_time, slot.reason.value)
        if slot.remaining_capacity < party_size:
            raise CapacityExceededError(requested=party_size, remaining=slot.remaining_capacity)

    def _resolve_customer(
        self,
        organization_id: int,
        email: str,
        contact: CustomerContact,
    ) -> Customer:
        customer = self._store.find_customer(organization_id, email)
        if customer is not None:
            return customer
        return self._store.create_customer(
            organization_id,
            email,
            (contact.name or "").strip() or None,
            (contact.phone or "").strip() or None,
        )

    # ── Lifecycle ────────────────────────────────────────────────────────

    def confirm_payment(self, reservation_id: int) -> Reservation:
        """Payment collaborator callback: pending → confirmed, paid."""
        reservation = self._transition(
            reservation_id,
            ReservationStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
        )
        self._notify("booking_confirmed", reservation)
        return reservation

    def cancel_booking(
        self,
        reservation_id: int,
        organization_id: int | None = None,
        reason: str | None = None,
    ) -> Reservation:
        reservation = self._transition(
            reservation_id,
            ReservationStatus.CANCELLED,
            organization_id=organization_id,
            cancel_reason=reason or "cancelled",
        )
        self._notify("booking_cancelled", reservation)
        return reservation

    def check_in(self, reservation_id: int, organization_id: int | None = None) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.CHECKED_IN, organization_id)

    def complete(self, reservation_id: int, organization_id: int | None = None) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.COMPLETED, organization_id)

    def mark_no_show(self, reservation_id: int, organization_id: int | None = None) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.NO_SHOW, organization_id)

    def reschedule_booking(
        self,
        reservation_id: int,
        organization_id: int | None = None,
        target_date: str | date | None = None,
        start_time: str | None = None,
    ) -> Reservation:
        """
        Move a live reservation to another slot of the same activity.

        Omitted date or start keep the current value. The party keeps
        its size and status; only date, start and end change.

        Raises:
            ReservationNotFoundError: Unknown or cross-tenant reservation.
            InvalidTransitionError: Reservation is completed, cancelled or no-show.
            SlotNotFoundError, SlotUnavailableError: Target is not bookable.
            CapacityExceededError: Not enough places left at the target.
        """
        current = self.get_booking(reservation_id, organization_id)
        if current.status.is_terminal:
            raise InvalidTransitionError(current.status.value, "rescheduled")

        day = parse_date(target_date) if target_date is not None else current.date
        start = parse_start_time(start_time) if start_time is not None else current.start

        activity = self._availability.load_activity(current.activity_id, current.organization_id)
        self._check_slot(activity, day, start, current.party_size, exclude_reservation_id=current.id)

        with self._store.transaction():
            reservation = self._store.move_reservation(
                reservation_id,
                day,
                start,
                start + activity.duration_minutes,
                capacity=activity.capacity,
                now=self._clock(),
                organization_id=organization_id,
            )

        logger.info(
            f"Reservation rescheduled: reservation_id={reservation_id}, "
            f"from={current.date.isoformat()} {current.start_time}, "
            f"to={day.isoformat()} {reservation.start_time}"
        )
        self._notify("booking_rescheduled", reservation)
        return reservation

    def expire_pending(self, ttl_minutes: int | None = None) -> int:
        """
        Cancel unpaid pending reservations older than the TTL.

        Only ever moves pending → cancelled; confirmed rows are untouched.
        Returns the number of expired reservations.
        """
        ttl = ttl_minutes if ttl_minutes is not None else self._config.pending_ttl_minutes
        now = self._clock()
        with self._store.transaction():
            expired = self._store.expire_pending(now - timedelta(minutes=ttl), now)

        for reservation in expired:
            logger.info(
                f"Pending reservation expired: reservation_id={reservation.id}, "
                f"code={reservation.confirmation_code}"
            )
            self._notify("booking_cancelled", reservation)
        return len(expired)

    def _transition(
        self,
        reservation_id: int,
        target: ReservationStatus,
        organization_id: int | None = None,
        payment_status: PaymentStatus | None = None,
        cancel_reason: str | None = None,
    ) -> Reservation:
        with self._store.transaction():
            reservation = self._store.transition(
                reservation_id,
                target,
                self._clock(),
                organization_id=organization_id,
                payment_status=payment_status,
                cancel_reason=cancel_reason,
            )
        logger.info(f"Reservation {reservation_id} → {target.value}")
        return reservation

    # ── Queries ──────────────────────────────────────────────────────────

    def get_booking(self, reservation_id: int, organization_id: int | None = None) -> Reservation:
        with self._store.transaction():
            reservation = self._store.get_reservation(reservation_id, organization_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    def get_by_confirmation_code(self, code: str) -> Reservation:
        with self._store.transaction():
            reservation = self._store.get_reservation_by_code(code)
        if reservation is None:
            raise ReservationNotFoundError(code)
        return reservation

    def list_bookings(
        self,
        organization_id: int,
        status: ReservationStatus | None = None,
        target_date: str | date | None = None,
        activity_id: int | None = None,
        customer_id: int | None = None,
    ) -> list[Reservation]:
        day = parse_date(target_date) if target_date is not None else None
        with self._store.transaction():
            return self._store.list_reservations(
                organization_id,
                status=status,
                target_date=day,
                activity_id=activity_id,
                customer_id=customer_id,
            )

    # ── Notifications ────────────────────────────────────────────────────

    def _notify(self, event_type: str, reservation: Reservation) -> None:
        try:
            self._notifier.notify(event_type, {
                "reservation_id": reservation.id,
                "organization_id": reservation.organization_id,
                "activity_id": reservation.activity_id,
                "customer_id": reservation.customer_id,
                "confirmation_code": reservation.confirmation_code,
                "date": reservation.date.isoformat(),
                "start_time": reservation.start_time,
                "status": reservation.status.value,
            })
        except Exception:
            logger.exception(f"Notification {event_type} failed for reservation {reservation.id}")
