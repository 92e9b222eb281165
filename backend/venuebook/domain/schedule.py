"""Operating schedule value objects.

Times are integer minutes since midnight. Weekdays are a fixed enum
(Monday first, matching date.weekday()) and never depend on the locale.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Self


class Weekday(Enum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date) -> Self:
        return cls(day.weekday())

    @classmethod
    def parse(cls, name: str) -> Self:
        """Accept full or three-letter English names, any case."""
        key = name.strip().lower()
        for weekday in cls:
            full = weekday.name.lower()
            if key == full or key == full[:3]:
                return weekday
        raise ValueError(f"Unknown weekday: {name!r}")

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class DayOverride:
    """Replaces the default hours for one weekday, or closes it."""

    open_time: int
    close_time: int
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.enabled and self.open_time >= self.close_time:
            raise ValueError("Override open time must be before close time")


@dataclass(frozen=True)
class BlockedEntry:
    """Operator-defined exclusion. No times means the whole day is blocked."""

    date: date
    start_time: int | None = None
    end_time: int | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("Partial block needs both start and end time")
        if self.start_time is not None and self.start_time >= self.end_time:
            raise ValueError("Block start must be before block end")

    @property
    def whole_day(self) -> bool:
        return self.start_time is None


@dataclass(frozen=True)
class CustomDate:
    """Opens the activity on one specific date with specific hours."""

    date: date
    open_time: int
    close_time: int

    def __post_init__(self) -> None:
        if self.open_time >= self.close_time:
            raise ValueError("Custom date open time must be before close time")


@dataclass(frozen=True)
class OperatingConfig:
    """Weekly schedule of an activity plus its date-specific exceptions."""

    operating_days: frozenset[Weekday]
    open_time: int
    close_time: int
    slot_interval: int | None = None
    overrides: Mapping[Weekday, DayOverride] = field(default_factory=dict)
    blocked: tuple[BlockedEntry, ...] = ()
    custom_dates: tuple[CustomDate, ...] = ()
    advance_booking_days: int | None = None

    def __post_init__(self) -> None:
        if self.open_time >= self.close_time:
            raise ValueError("Open time must be before close time")
        if self.slot_interval is not None and self.slot_interval <= 0:
            raise ValueError("Slot interval must be positive")
        if self.advance_booking_days is not None and self.advance_booking_days < 0:
            raise ValueError("Advance booking days cannot be negative")

    def interval_for(self, duration: int) -> int:
        return self.slot_interval or duration

    def blocks_on(self, day: date) -> list[BlockedEntry]:
        return [entry for entry in self.blocked if entry.date == day]

    def custom_date(self, day: date) -> CustomDate | None:
        for custom in self.custom_dates:
            if custom.date == day:
                return custom
        return None
