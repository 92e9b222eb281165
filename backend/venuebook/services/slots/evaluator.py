# backend/venuebook/services/slots/evaluator.py
"""
Per-slot conflict and capacity evaluation.

Checks, first match wins:
  1. blocked: whole-day block on the date, or partial block overlapping the slot
  2. past: slot start is before now (+ optional lead time)
  3. booked: overlapping non-cancelled party sizes use up the capacity

All interval tests are half-open: [start, end).
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from ...domain.models import Reservation, SlotReason
from ...domain.schedule import BlockedEntry
from ...domain.timeutils import overlaps


@dataclass(frozen=True)
class SlotVerdict:
    available: bool
    remaining: int
    reason: SlotReason | None = None


def find_block(
    slot: tuple[int, int],
    target_date: date,
    blocked: Iterable[BlockedEntry],
) -> BlockedEntry | None:
    """Return the first block entry covering the slot, if any."""
    start, end = slot
    for entry in blocked:
        if entry.date != target_date:
            continue
        if entry.whole_day:
            return entry
        if overlaps(start, end, entry.start_time, entry.end_time):
            return entry
    return None


def booked_party_size(
    slot: tuple[int, int],
    target_date: date,
    reservations: Iterable[Reservation],
) -> int:
    """Sum party sizes of non-cancelled reservations overlapping the slot."""
    start, end = slot
    return sum(
        r.party_size
        for r in reservations
        if r.holds_capacity
        and r.date == target_date
        and overlaps(start, end, r.start, r.end)
    )


def is_past(
    slot: tuple[int, int],
    target_date: date,
    now: datetime,
    lead_minutes: int = 0,
) -> bool:
    slot_start = datetime.combine(target_date, datetime.min.time()) + timedelta(minutes=slot[0])
    return slot_start < now + timedelta(minutes=lead_minutes)


def evaluate(
    slot: tuple[int, int],
    target_date: date,
    reservations: Iterable[Reservation],
    blocked: Iterable[BlockedEntry],
    capacity: int,
    now: datetime,
    lead_minutes: int = 0,
) -> SlotVerdict:
    """Evaluate a single candidate slot."""
    if find_block(slot, target_date, blocked) is not None:
        return SlotVerdict(available=False, remaining=0, reason=SlotReason.BLOCKED)

    if is_past(slot, target_date, now, lead_minutes):
        return SlotVerdict(available=False, remaining=0, reason=SlotReason.PAST)

    remaining = capacity - booked_party_size(slot, target_date, reservations)
    if remaining <= 0:
        return SlotVerdict(available=False, remaining=0, reason=SlotReason.BOOKED)

    return SlotVerdict(available=True, remaining=remaining)
