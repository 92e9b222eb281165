# backend/venuebook/routers/internal.py
"""
Internal API endpoints for trusted consumers.

Called directly by the payment collaborator, never by customers.
Access: private network only (the public proxy does not route /internal/*)
"""

import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_booking_service
from ..schemas.bookings import BookingRead
from ..services.reservations import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", tags=["internal"])


@router.post("/payments/{reservation_id}/succeeded", response_model=BookingRead)
def payment_succeeded(
    reservation_id: int,
    service: BookingService = Depends(get_booking_service),
):
    """Payment captured: pending → confirmed, payment_status paid."""
    logger.info(f"Payment succeeded callback: reservation_id={reservation_id}")
    return BookingRead.from_domain(service.confirm_payment(reservation_id))
