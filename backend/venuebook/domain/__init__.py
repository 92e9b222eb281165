from .errors import (
    ActivityNotFoundError,
    CapacityExceededError,
    DomainError,
    ErrorCode,
    FormatError,
    InvalidTransitionError,
    PartySizeError,
    PersistenceError,
    ReservationNotFoundError,
    SlotNotFoundError,
    SlotUnavailableError,
)
from .models import (
    Activity,
    BookingRequest,
    Customer,
    CustomerContact,
    NewReservation,
    PaymentStatus,
    Reservation,
    ReservationStatus,
    SlotReason,
    TimeSlot,
)
from .schedule import BlockedEntry, CustomDate, DayOverride, OperatingConfig, Weekday

__all__ = [
    "Activity",
    "BookingRequest",
    "Customer",
    "CustomerContact",
    "NewReservation",
    "PaymentStatus",
    "Reservation",
    "ReservationStatus",
    "SlotReason",
    "TimeSlot",
    "BlockedEntry",
    "CustomDate",
    "DayOverride",
    "OperatingConfig",
    "Weekday",
    "DomainError",
    "ErrorCode",
    "FormatError",
    "PartySizeError",
    "ActivityNotFoundError",
    "SlotNotFoundError",
    "SlotUnavailableError",
    "CapacityExceededError",
    "ReservationNotFoundError",
    "InvalidTransitionError",
    "PersistenceError",
]
