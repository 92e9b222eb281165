# backend/venuebook/schemas/slots.py
"""
Pydantic schemas for availability API.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class TimeSlotRead(BaseModel):
    """State of a single slot."""
    start_time: str  # "HH:MM"
    end_time: str    # "HH:MM"
    capacity: int
    remaining_capacity: int
    available: bool
    reason: Optional[str] = Field(None, description="booked / blocked / closed / past")

    model_config = {"from_attributes": True}


class AvailabilityResponse(BaseModel):
    """Slots of one activity on one day, ordered by start time."""
    activity_id: int
    date: date
    slots: list[TimeSlotRead]


class DayStatusRead(BaseModel):
    """Status of a single day in calendar."""
    date: date
    open: bool
    reason: Optional[str] = Field(None, description="blocked / closed / beyond-horizon / past")

    model_config = {"from_attributes": True}


class CalendarResponse(BaseModel):
    """Month calendar of open days."""
    activity_id: int
    year: int
    month: int
    days: list[DayStatusRead]
