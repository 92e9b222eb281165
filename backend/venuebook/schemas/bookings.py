# backend/venuebook/schemas/bookings.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field

from ..domain import Reservation


class CustomerContactIn(BaseModel):
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None


class BookingCreate(BaseModel):
    """Request body for a booking. Formats are validated by the engine."""
    activity_id: int
    date: str = Field(description="Date in YYYY-MM-DD format")
    start_time: str = Field(description="Time in HH:MM format")
    party_size: int
    customer: CustomerContactIn
    notes: Optional[str] = None


class BookingCancel(BaseModel):
    reason: Optional[str] = None


class BookingReschedule(BaseModel):
    """Omitted fields keep the reservation's current value."""
    date: Optional[str] = Field(None, description="Date in YYYY-MM-DD format")
    start_time: Optional[str] = Field(None, description="Time in HH:MM format")


class BookingRead(BaseModel):
    id: int

    organization_id: int
    activity_id: int
    customer_id: int
    confirmation_code: str

    date: date
    start_time: str
    end_time: str
    party_size: int

    status: str
    payment_status: str
    total_amount: float
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "BookingRead":
        return cls(
            id=reservation.id,
            organization_id=reservation.organization_id,
            activity_id=reservation.activity_id,
            customer_id=reservation.customer_id,
            confirmation_code=reservation.confirmation_code,
            date=reservation.date,
            start_time=reservation.start_time,
            end_time=reservation.end_time,
            party_size=reservation.party_size,
            status=reservation.status.value,
            payment_status=reservation.payment_status.value,
            total_amount=reservation.total_amount,
            notes=reservation.notes,
            cancel_reason=reservation.cancel_reason,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )
