# backend/venuebook/routers/bookings.py
# PATCH = 405, DELETE = 405: changes go through the action endpoints

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_booking_service, get_organization_id
from ..domain import BookingRequest, CustomerContact, ReservationNotFoundError, ReservationStatus
from ..schemas.bookings import BookingCancel, BookingCreate, BookingRead, BookingReschedule
from ..services.reservations import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    date: Optional[str] = None,
    activity_id: Optional[int] = None,
    customer_id: Optional[int] = None,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    reservations = service.list_bookings(
        organization_id,
        status=status_filter,
        target_date=date,
        activity_id=activity_id,
        customer_id=customer_id,
    )
    return [BookingRead.from_domain(r) for r in reservations]


@router.get("/by-code/{code}", response_model=BookingRead)
def get_booking_by_code(
    code: str,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    reservation = service.get_by_confirmation_code(code)
    if reservation.organization_id != organization_id:
        raise ReservationNotFoundError(code)
    return BookingRead.from_domain(reservation)


@router.get("/{id}", response_model=BookingRead)
def get_booking(
    id: int,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    return BookingRead.from_domain(service.get_booking(id, organization_id))


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    reservation = service.create_booking(
        BookingRequest(
            activity_id=data.activity_id,
            date=data.date,
            start_time=data.start_time,
            party_size=data.party_size,
            customer=CustomerContact(
                email=data.customer.email,
                name=data.customer.name,
                phone=data.customer.phone,
            ),
            organization_id=organization_id,
            notes=data.notes,
        )
    )
    return BookingRead.from_domain(reservation)


@router.post("/{id}/cancel", response_model=BookingRead)
def cancel_booking(
    id: int,
    data: Optional[BookingCancel] = None,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    reason = data.reason if data else None
    return BookingRead.from_domain(service.cancel_booking(id, organization_id, reason))


@router.post("/{id}/reschedule", response_model=BookingRead)
def reschedule_booking(
    id: int,
    data: BookingReschedule,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    reservation = service.reschedule_booking(
        id,
        organization_id,
        target_date=data.date,
        start_time=data.start_time,
    )
    return BookingRead.from_domain(reservation)


@router.post("/{id}/check-in", response_model=BookingRead)
def check_in_booking(
    id: int,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    return BookingRead.from_domain(service.check_in(id, organization_id))


@router.post("/{id}/complete", response_model=BookingRead)
def complete_booking(
    id: int,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    return BookingRead.from_domain(service.complete(id, organization_id))


@router.post("/{id}/no-show", response_model=BookingRead)
def no_show_booking(
    id: int,
    organization_id: int = Depends(get_organization_id),
    service: BookingService = Depends(get_booking_service),
):
    return BookingRead.from_domain(service.mark_no_show(id, organization_id))


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
