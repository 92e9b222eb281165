"""SQLAlchemy implementation of the BookingStore."""

import json
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain import (
    Activity,
    BlockedEntry,
    CapacityExceededError,
    CustomDate,
    Customer,
    DayOverride,
    DomainError,
    FormatError,
    InvalidTransitionError,
    NewReservation,
    OperatingConfig,
    PaymentStatus,
    PersistenceError,
    Reservation,
    ReservationNotFoundError,
    ReservationStatus,
    Weekday,
)
from ..domain.timeutils import parse_date, time_to_minutes
from ..models.generated import (
    Activities as DBActivity,
    ActivityBlocks as DBActivityBlock,
    Customers as DBCustomer,
    Reservations as DBReservation,
)
from .interfaces import BookingStore

logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIME = "10:00"
DEFAULT_CLOSE_TIME = "22:00"


class SqlBookingStore(BookingStore):
    """Relational booking store on a request-scoped Session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    # ── Transactions ─────────────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except DomainError:
            self._db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Booking store transaction failed")
            raise PersistenceError() from exc
        except Exception:
            self._db.rollback()
            raise

    # ── Activities ───────────────────────────────────────────────────────

    def get_activity(self, activity_id: int) -> Activity | None:
        row = self._db.get(DBActivity, activity_id)
        if row is None:
            return None
        return _to_activity(row, list(row.blocks))

    # ── Customers ────────────────────────────────────────────────────────

    def find_customer(self, organization_id: int, email: str) -> Customer | None:
        row = (
            self._db.query(DBCustomer)
            .filter(
                DBCustomer.organization_id == organization_id,
                DBCustomer.email == email,
            )
            .first()
        )
        return _to_customer(row) if row else None

    def create_customer(
        self,
        organization_id: int,
        email: str,
        full_name: str | None,
        phone: str | None,
    ) -> Customer:
        row = DBCustomer(
            organization_id=organization_id,
            email=email,
            full_name=full_name,
            phone=phone,
        )
        self._db.add(row)
        self._db.flush()
        logger.info(f"Created customer: customer_id={row.id}, organization_id={organization_id}")
        return _to_customer(row)

    # ── Reservations ─────────────────────────────────────────────────────

    def list_active_reservations(self, activity_id: int, target_date: date) -> list[Reservation]:
        rows = (
            self._db.query(DBReservation)
            .filter(
                DBReservation.activity_id == activity_id,
                DBReservation.date == target_date,
                DBReservation.status != ReservationStatus.CANCELLED.value,
            )
            .order_by(DBReservation.start_minute)
            .all()
        )
        return [_to_reservation(row) for row in rows]

    def _lock_activity(self, activity_id: int) -> None:
        # Row lock on the activity serialises concurrent bookings for it
        # (FOR UPDATE on PostgreSQL; SQLite already holds BEGIN IMMEDIATE).
        locked = (
            self._db.query(DBActivity.id)
            .filter(DBActivity.id == activity_id)
            .with_for_update()
            .one_or_none()
        )
        if locked is None:
            raise PersistenceError("Activity disappeared during booking")

    def _remaining(
        self,
        activity_id: int,
        target_date: date,
        start: int,
        end: int,
        capacity: int,
        exclude_reservation_id: int | None = None,
    ) -> int:
        query = self._db.query(func.coalesce(func.sum(DBReservation.party_size), 0)).filter(
            DBReservation.activity_id == activity_id,
            DBReservation.date == target_date,
            DBReservation.status != ReservationStatus.CANCELLED.value,
            DBReservation.start_minute < end,
            DBReservation.end_minute > start,
        )
        if exclude_reservation_id is not None:
            query = query.filter(DBReservation.id != exclude_reservation_id)
        return capacity - int(query.scalar())

    def insert_reservation(self, draft: NewReservation, capacity: int) -> Reservation:
        self._lock_activity(draft.activity_id)

        remaining = self._remaining(draft.activity_id, draft.date, draft.start, draft.end, capacity)
        if draft.party_size > remaining:
            raise CapacityExceededError(requested=draft.party_size, remaining=remaining)

        row = DBReservation(
            organization_id=draft.organization_id,
            activity_id=draft.activity_id,
            customer_id=draft.customer_id,
            confirmation_code=draft.confirmation_code,
            date=draft.date,
            start_minute=draft.start,
            end_minute=draft.end,
            party_size=draft.party_size,
            status=ReservationStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            total_amount=draft.total_amount,
            notes=draft.notes,
            created_at=draft.created_at,
            updated_at=draft.created_at,
        )
        self._db.add(row)
        self._db.flush()
        return _to_reservation(row)

    def get_reservation(
        self,
        reservation_id: int,
        organization_id: int | None = None,
    ) -> Reservation | None:
        row = self._db.get(DBReservation, reservation_id)
        if row is None:
            return None
        if organization_id is not None and row.organization_id != organization_id:
            return None
        return _to_reservation(row)

    def get_reservation_by_code(self, confirmation_code: str) -> Reservation | None:
        row = (
            self._db.query(DBReservation)
            .filter(DBReservation.confirmation_code == confirmation_code.strip().upper())
            .first()
        )
        return _to_reservation(row) if row else None

    def list_reservations(
        self,
        organization_id: int,
        status: ReservationStatus | None = None,
        target_date: date | None = None,
        activity_id: int | None = None,
        customer_id: int | None = None,
    ) -> list[Reservation]:
        query = self._db.query(DBReservation).filter(
            DBReservation.organization_id == organization_id
        )
        if status is not None:
            query = query.filter(DBReservation.status == status.value)
        if target_date is not None:
            query = query.filter(DBReservation.date == target_date)
        if activity_id is not None:
            query = query.filter(DBReservation.activity_id == activity_id)
        if customer_id is not None:
            query = query.filter(DBReservation.customer_id == customer_id)

        rows = query.order_by(DBReservation.date.desc(), DBReservation.start_minute.asc()).all()
        return [_to_reservation(row) for row in rows]

    def transition(
        self,
        reservation_id: int,
        target: ReservationStatus,
        now: datetime,
        organization_id: int | None = None,
        payment_status: PaymentStatus | None = None,
        cancel_reason: str | None = None,
    ) -> Reservation:
        row = (
            self._db.query(DBReservation)
            .filter(DBReservation.id == reservation_id)
            .with_for_update()
            .one_or_none()
        )
        if row is None or (organization_id is not None and row.organization_id != organization_id):
            raise ReservationNotFoundError(reservation_id)

        current = ReservationStatus(row.status)
        if not current.can_transition_to(target):
            raise InvalidTransitionError(current.value, target.value)

        row.status = target.value
        if payment_status is not None:
            row.payment_status = payment_status.value
        if cancel_reason is not None:
            row.cancel_reason = cancel_reason
        row.updated_at = now
        self._db.flush()
        return _to_reservation(row)

    def move_reservation(
        self,
        reservation_id: int,
        target_date: date,
        start: int,
        end: int,
        capacity: int,
        now: datetime,
        organization_id: int | None = None,
    ) -> Reservation:
        row = self._db.get(DBReservation, reservation_id)
        if row is None or (organization_id is not None and row.organization_id != organization_id):
            raise ReservationNotFoundError(reservation_id)

        self._lock_activity(row.activity_id)
        row = (
            self._db.query(DBReservation)
            .filter(DBReservation.id == reservation_id)
            .with_for_update()
            .one()
        )
        current = ReservationStatus(row.status)
        if current.is_terminal:
            raise InvalidTransitionError(current.value, "rescheduled")

        remaining = self._remaining(
            row.activity_id, target_date, start, end, capacity, exclude_reservation_id=row.id
        )
        if row.party_size > remaining:
            raise CapacityExceededError(requested=row.party_size, remaining=remaining)

        row.date = target_date
        row.start_minute = start
        row.end_minute = end
        row.updated_at = now
        self._db.flush()
        return _to_reservation(row)

    def expire_pending(self, created_before: datetime, now: datetime) -> list[Reservation]:
        rows = (
            self._db.query(DBReservation)
            .filter(
                DBReservation.status == ReservationStatus.PENDING.value,
                DBReservation.created_at < created_before,
            )
            .with_for_update()
            .all()
        )
        for row in rows:
            row.status = ReservationStatus.CANCELLED.value
            row.cancel_reason = "expired"
            row.updated_at = now
        self._db.flush()
        return [_to_reservation(row) for row in rows]


# ── Row → domain conversion ──────────────────────────────────────────────


def _to_customer(row: DBCustomer) -> Customer:
    return Customer(
        id=row.id,
        organization_id=row.organization_id,
        email=row.email,
        full_name=row.full_name,
        phone=row.phone,
    )


def _to_reservation(row: DBReservation) -> Reservation:
    return Reservation(
        id=row.id,
        organization_id=row.organization_id,
        activity_id=row.activity_id,
        customer_id=row.customer_id,
        confirmation_code=row.confirmation_code,
        date=row.date,
        start=row.start_minute,
        end=row.end_minute,
        party_size=row.party_size,
        status=ReservationStatus(row.status),
        payment_status=PaymentStatus(row.payment_status),
        total_amount=row.total_amount,
        notes=row.notes,
        cancel_reason=row.cancel_reason,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_activity(row: DBActivity, blocks: list[DBActivityBlock]) -> Activity:
    capacity = row.capacity if row.capacity is not None else row.max_party_size
    return Activity(
        id=row.id,
        organization_id=row.organization_id,
        name=row.name,
        duration_minutes=row.duration_minutes,
        min_party_size=row.min_party_size,
        max_party_size=row.max_party_size,
        capacity=capacity,
        price=row.price or 0.0,
        is_active=bool(row.is_active),
        schedule=_load_schedule(row.id, row.schedule, blocks),
    )


def _load_schedule(
    activity_id: int,
    schedule_json: str | None,
    blocks: list[DBActivityBlock],
) -> OperatingConfig:
    """
    Build OperatingConfig from the stored JSON and block rows.

    A malformed schedule is logged and treated as "never open", so one bad
    activity config cannot break availability for the rest of the venue.
    """
    try:
        data = json.loads(schedule_json) if schedule_json else {}
        return parse_schedule(data, blocks)
    except (json.JSONDecodeError, FormatError, ValueError, TypeError, KeyError, AttributeError):
        logger.exception(f"Invalid schedule for activity={activity_id}, treating as closed")
        return OperatingConfig(
            operating_days=frozenset(),
            open_time=time_to_minutes(DEFAULT_OPEN_TIME),
            close_time=time_to_minutes(DEFAULT_CLOSE_TIME),
        )


def parse_schedule(data: dict, blocks: list[DBActivityBlock] = ()) -> OperatingConfig:
    """
    Parse the schedule JSON:

    {
      "operating_days": ["Monday", "fri", ...],
      "open_time": "09:00", "close_time": "17:00",
      "slot_interval": 60,
      "overrides": {"Saturday": {"open_time": "10:00", "close_time": "14:00", "enabled": true}},
      "custom_dates": [{"date": "2025-12-24", "open_time": "10:00", "close_time": "13:00"}],
      "advance_booking_days": 60
    }
    """
    overrides = {}
    for day_name, value in (data.get("overrides") or {}).items():
        enabled = bool(value.get("enabled", True))
        overrides[Weekday.parse(day_name)] = DayOverride(
            open_time=time_to_minutes(value.get("open_time", DEFAULT_OPEN_TIME)),
            close_time=time_to_minutes(value.get("close_time", DEFAULT_CLOSE_TIME)),
            enabled=enabled,
        )

    custom_dates = tuple(
        CustomDate(
            date=parse_date(item["date"]),
            open_time=time_to_minutes(item["open_time"]),
            close_time=time_to_minutes(item["close_time"]),
        )
        for item in data.get("custom_dates") or []
    )

    blocked = tuple(
        BlockedEntry(
            date=block.date,
            start_time=time_to_minutes(block.start_time) if block.start_time else None,
            end_time=time_to_minutes(block.end_time) if block.end_time else None,
            reason=block.reason,
        )
        for block in blocks
    )

    return OperatingConfig(
        operating_days=frozenset(Weekday.parse(d) for d in data.get("operating_days") or []),
        open_time=time_to_minutes(data.get("open_time") or DEFAULT_OPEN_TIME),
        close_time=time_to_minutes(data.get("close_time") or DEFAULT_CLOSE_TIME),
        slot_interval=data.get("slot_interval"),
        overrides=overrides,
        blocked=blocked,
        custom_dates=custom_dates,
        advance_booking_days=data.get("advance_booking_days"),
    )
