# backend/venuebook/routers/availability.py
"""
Availability API endpoints.

GET /activities/{activity_id}/availability - Slots for one day
GET /activities/{activity_id}/calendar     - Open/closed days of a month
"""

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_availability_service, get_organization_id
from ..domain.timeutils import parse_date
from ..schemas.slots import (
    AvailabilityResponse,
    CalendarResponse,
    DayStatusRead,
    TimeSlotRead,
)
from ..services.slots import AvailabilityService


router = APIRouter(prefix="/activities", tags=["availability"])


@router.get("/{activity_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    activity_id: int,
    target_date: str = Query(..., alias="date"),
    organization_id: int = Depends(get_organization_id),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Get slots of an activity for one day, with remaining capacity."""
    day = parse_date(target_date)
    slots = service.get_availability(activity_id, day, organization_id)

    return AvailabilityResponse(
        activity_id=activity_id,
        date=day,
        slots=[
            TimeSlotRead(
                start_time=slot.start_time,
                end_time=slot.end_time,
                capacity=slot.capacity,
                remaining_capacity=slot.remaining_capacity,
                available=slot.available,
                reason=slot.reason.value if slot.reason else None,
            )
            for slot in slots
        ],
    )


@router.get("/{activity_id}/calendar", response_model=CalendarResponse)
def get_calendar(
    activity_id: int,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    organization_id: int = Depends(get_organization_id),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Get open/closed status of every day in a month."""
    days = service.get_calendar(activity_id, year, month, organization_id)

    return CalendarResponse(
        activity_id=activity_id,
        year=year,
        month=month,
        days=[DayStatusRead(date=d.date, open=d.open, reason=d.reason) for d in days],
    )
