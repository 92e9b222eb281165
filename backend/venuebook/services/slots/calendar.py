# backend/venuebook/services/slots/calendar.py
"""
Operating calendar resolution.

Decides whether an activity opens on a date and with which hours:

  custom date  → open with its own hours
  horizon      → closed beyond advance_booking_days
  weekday      → closed if not an operating day
  override     → closed if disabled, else override hours
  defaults     → open/close from the config

Blocked entries are NOT applied here: whole-day and partial blocks are
evaluated per slot so they surface as reason="blocked".
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from ...domain.schedule import OperatingConfig, Weekday

CLOSED = "closed"
BLOCKED = "blocked"
BEYOND_HORIZON = "beyond-horizon"
PAST = "past"


@dataclass(frozen=True)
class DayHours:
    """Resolved hours for one date. open_time/close_time set only when open."""
    open: bool
    open_time: int | None = None
    close_time: int | None = None
    reason: str | None = None


@dataclass(frozen=True)
class DayStatus:
    """One cell of a month calendar."""
    date: date
    open: bool
    reason: str | None = None


def resolve_day(
    config: OperatingConfig,
    target_date: date,
    today: date | None = None,
) -> DayHours:
    """
    Resolve opening hours for target_date.

    `today` enables the advance-booking horizon check; pass None to skip it.
    """
    custom = config.custom_date(target_date)

    if custom is None and Weekday.of(target_date) not in config.operating_days:
        return DayHours(open=False, reason=CLOSED)

    if (
        today is not None
        and config.advance_booking_days is not None
        and target_date > today + timedelta(days=config.advance_booking_days)
    ):
        return DayHours(open=False, reason=BEYOND_HORIZON)

    if custom is not None:
        return DayHours(open=True, open_time=custom.open_time, close_time=custom.close_time)

    override = config.overrides.get(Weekday.of(target_date))
    if override is not None:
        if not override.enabled:
            return DayHours(open=False, reason=CLOSED)
        return DayHours(open=True, open_time=override.open_time, close_time=override.close_time)

    return DayHours(open=True, open_time=config.open_time, close_time=config.close_time)


def is_whole_day_blocked(config: OperatingConfig, target_date: date) -> bool:
    return any(entry.whole_day for entry in config.blocks_on(target_date))


def month_calendar(
    config: OperatingConfig,
    year: int,
    month: int,
    today: date,
) -> list[DayStatus]:
    """
    Day-by-day open/closed view of a month.

    Reasons are checked in order: blocked, closed / beyond-horizon, past.
    """
    _, days_in_month = calendar.monthrange(year, month)
    days: list[DayStatus] = []

    for day_number in range(1, days_in_month + 1):
        current = date(year, month, day_number)

        if is_whole_day_blocked(config, current):
            days.append(DayStatus(date=current, open=False, reason=BLOCKED))
            continue

        hours = resolve_day(config, current, today)
        if not hours.open:
            days.append(DayStatus(date=current, open=False, reason=hours.reason))
            continue

        if current < today:
            days.append(DayStatus(date=current, open=False, reason=PAST))
            continue

        days.append(DayStatus(date=current, open=True))

    return days
