# backend/venuebook/services/slots/__init__.py
"""
Slots calculation module.

calendar   → is the activity open on a date, and when
calculator → candidate slot grid for the open interval
evaluator  → blocked / past / capacity verdict per slot
availability → orchestration over a BookingStore
"""

from .config import BookingConfig, get_booking_config
from .calendar import DayHours, DayStatus, month_calendar, resolve_day
from .calculator import generate_slots
from .evaluator import SlotVerdict, evaluate
from .availability import AvailabilityService

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "DayHours",
    "DayStatus",
    "month_calendar",
    "resolve_day",
    "generate_slots",
    "SlotVerdict",
    "evaluate",
    "AvailabilityService",
]
