"""Domain error codes for the booking engine."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_PARTY_SIZE = "INVALID_PARTY_SIZE"
    ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
    SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
    SLOT_UNAVAILABLE = "SLOT_UNAVAILABLE"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class FormatError(DomainError):
    """Raised when a date, time or email string is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_FORMAT, message=message)


class PartySizeError(DomainError):
    """Raised when party size is outside the activity's limits."""

    def __init__(self, party_size: int, minimum: int, maximum: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PARTY_SIZE,
            message=f"Party size must be between {minimum} and {maximum}",
        )
        self.party_size = party_size


class ActivityNotFoundError(DomainError):
    """Raised when an activity is unknown or belongs to another organization."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(
            code=ErrorCode.ACTIVITY_NOT_FOUND,
            message="Activity not found",
        )
        self.activity_id = activity_id


class SlotNotFoundError(DomainError):
    """Raised when the requested start time is not on the slot grid."""

    def __init__(self, start_time: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_NOT_FOUND,
            message=f"No slot starts at {start_time}",
        )
        self.start_time = start_time


class SlotUnavailableError(DomainError):
    """Raised when the slot exists but is closed, blocked or past."""

    def __init__(self, start_time: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_UNAVAILABLE,
            message=f"Slot {start_time} is not available ({reason})",
        )
        self.start_time = start_time
        self.reason = reason


class CapacityExceededError(DomainError):
    """Raised when the slot cannot hold the requested party."""

    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message=f"Only {max(remaining, 0)} places left, {requested} requested",
        )
        self.requested = requested
        self.remaining = remaining


class ReservationNotFoundError(DomainError):
    """Raised when a reservation is unknown or belongs to another organization."""

    def __init__(self, reservation: int | str) -> None:
        super().__init__(
            code=ErrorCode.RESERVATION_NOT_FOUND,
            message="Reservation not found",
        )
        self.reservation = reservation


class InvalidTransitionError(DomainError):
    """Raised when a reservation cannot move to the requested status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot move reservation from {current} to {target}",
        )
        self.current = current
        self.target = target


class PersistenceError(DomainError):
    """Raised when the storage layer fails. Safe to retry the whole request."""

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(code=ErrorCode.PERSISTENCE_FAILED, message=message)
