# backend/venuebook/domain/timeutils.py
"""
Clock-string arithmetic.

All schedule math runs on integer minute offsets from midnight.

Policy:
- "HH:MM" (24h) and "H:MM AM/PM" (12h) are accepted on input.
- "24:00" is accepted as an end-of-day closing time (1440).
- minutes_to_time() wraps values >= 1440 modulo one day, so a slot
  ending at midnight is rendered "00:00".
"""

import re
from datetime import date

from .errors import FormatError

MINUTES_PER_DAY = 24 * 60

_CLOCK_24 = re.compile(r"^(\d{1,2}):(\d{2})$")
_CLOCK_12 = re.compile(r"^(\d{1,2}):(\d{2})\s*([AaPp][Mm])$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def time_to_minutes(value: str) -> int:
    """Convert a clock string to minutes since midnight."""
    if not isinstance(value, str):
        raise FormatError(f"Invalid time {value!r}, expected HH:MM")

    text = value.strip()

    match = _CLOCK_24.match(text)
    if match:
        hour, minute = int(match[1]), int(match[2])
        if hour == 24 and minute == 0:
            return MINUTES_PER_DAY
        if hour > 23 or minute > 59:
            raise FormatError(f"Invalid time {value!r}, expected HH:MM")
        return hour * 60 + minute

    match = _CLOCK_12.match(text)
    if match:
        hour, minute = int(match[1]), int(match[2])
        if not 1 <= hour <= 12 or minute > 59:
            raise FormatError(f"Invalid time {value!r}, expected HH:MM")
        hour %= 12
        if match[3].lower() == "pm":
            hour += 12
        return hour * 60 + minute

    raise FormatError(f"Invalid time {value!r}, expected HH:MM")


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    if minutes < 0:
        raise FormatError(f"Invalid minute offset {minutes}")
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str | date) -> date:
    """Parse a strict YYYY-MM-DD date."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value.strip()):
        raise FormatError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise FormatError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return a_start < b_end and b_start < a_end
