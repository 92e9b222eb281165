# backend/venuebook/services/slots/availability.py
"""
Availability of one activity on one day.

Steps:
  1. Load activity + operating config (tenant-scoped)
  2. Resolve the day (calendar) → closed = no slots
  3. Generate the candidate grid (calculator)
  4. Load non-cancelled reservations for the day
  5. Evaluate every candidate (evaluator)

Read-only and idempotent: used both for display and as the pre-check
of the booking transaction. Results are never cached because
reservations change underneath them.
"""

import logging
from datetime import date, datetime
from typing import Callable

from ...domain import Activity, ActivityNotFoundError, SlotReason, TimeSlot
from ...domain.timeutils import minutes_to_time, parse_date
from ...stores.interfaces import BookingStore
from .calculator import generate_slots
from .calendar import DayStatus, month_calendar, resolve_day
from .config import BookingConfig, get_booking_config
from .evaluator import SlotVerdict, evaluate

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Computes slot availability from a BookingStore."""

    def __init__(
        self,
        store: BookingStore,
        config: BookingConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._config = config or get_booking_config()
        self._clock = clock or self._config.now

    def get_availability(
        self,
        activity_id: int,
        target_date: str | date,
        organization_id: int | None = None,
    ) -> list[TimeSlot]:
        """
        Return the day's slots ordered by start time.

        Raises:
            FormatError: If target_date is malformed.
            ActivityNotFoundError: Unknown or cross-tenant activity.
        """
        day = parse_date(target_date)
        activity = self.load_activity(activity_id, organization_id)
        return self.slots_for(activity, day)

    def get_calendar(
        self,
        activity_id: int,
        year: int,
        month: int,
        organization_id: int | None = None,
    ) -> list[DayStatus]:
        """Return per-day open/closed status for a month."""
        activity = self.load_activity(activity_id, organization_id)
        return month_calendar(activity.schedule, year, month, self._clock().date())

    def load_activity(self, activity_id: int, organization_id: int | None = None) -> Activity:
        with self._store.transaction():
            activity = self._store.get_activity(activity_id)
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        if organization_id is not None and activity.organization_id != organization_id:
            logger.warning(
                f"Cross-tenant activity access: activity={activity_id}, "
                f"organization={organization_id}"
            )
            raise ActivityNotFoundError(activity_id)
        return activity

    def slots_for(
        self,
        activity: Activity,
        day: date,
        exclude_reservation_id: int | None = None,
    ) -> list[TimeSlot]:
        now = self._clock()
        schedule = activity.schedule

        hours = resolve_day(schedule, day, now.date())
        if not hours.open:
            return []

        candidates = generate_slots(
            hours.open_time,
            hours.close_time,
            activity.duration_minutes,
            schedule.interval_for(activity.duration_minutes),
        )
        if not candidates:
            return []

        if not activity.is_active:
            closed = SlotVerdict(available=False, remaining=0, reason=SlotReason.CLOSED)
            return [_to_time_slot(slot, activity.capacity, closed) for slot in candidates]

        with self._store.transaction():
            reservations = self._store.list_active_reservations(activity.id, day)
        if exclude_reservation_id is not None:
            # A reservation being moved does not compete with itself
            reservations = [r for r in reservations if r.id != exclude_reservation_id]
        blocked = schedule.blocks_on(day)

        slots = []
        for slot in candidates:
            verdict = evaluate(
                slot,
                day,
                reservations,
                blocked,
                activity.capacity,
                now,
                self._config.min_lead_minutes,
            )
            slots.append(_to_time_slot(slot, activity.capacity, verdict))

        return slots


def _to_time_slot(slot: tuple[int, int], capacity: int, verdict: SlotVerdict) -> TimeSlot:
    start, end = slot
    return TimeSlot(
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(end),
        capacity=capacity,
        remaining_capacity=verdict.remaining,
        available=verdict.available,
        reason=verdict.reason,
    )
