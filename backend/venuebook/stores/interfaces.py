"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
Services receive a store through their constructor.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime

from ..domain import (
    Activity,
    Customer,
    NewReservation,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)


class BookingStore(ABC):
    """Interface for activity, customer and reservation persistence."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Commit on success, roll back on any error.

        Storage failures surface as PersistenceError.
        """
        ...

    @abstractmethod
    def get_activity(self, activity_id: int) -> Activity | None:
        """Return an activity with its operating config and blocks, or None."""
        ...

    @abstractmethod
    def list_active_reservations(self, activity_id: int, target_date: date) -> list[Reservation]:
        """Return non-cancelled reservations for the activity on the date."""
        ...

    @abstractmethod
    def find_customer(self, organization_id: int, email: str) -> Customer | None:
        """Look up a customer by normalized email within the organization."""
        ...

    @abstractmethod
    def create_customer(
        self,
        organization_id: int,
        email: str,
        full_name: str | None,
        phone: str | None,
    ) -> Customer:
        ...

    @abstractmethod
    def insert_reservation(self, draft: NewReservation, capacity: int) -> Reservation:
        """Insert a pending reservation under a lock.

        Re-derives overlapping party sizes after locking and raises
        CapacityExceededError if the draft would not fit.
        """
        ...

    @abstractmethod
    def get_reservation(
        self,
        reservation_id: int,
        organization_id: int | None = None,
    ) -> Reservation | None:
        ...

    @abstractmethod
    def get_reservation_by_code(self, confirmation_code: str) -> Reservation | None:
        ...

    @abstractmethod
    def list_reservations(
        self,
        organization_id: int,
        status: ReservationStatus | None = None,
        target_date: date | None = None,
        activity_id: int | None = None,
        customer_id: int | None = None,
    ) -> list[Reservation]:
        """Return reservations ordered by date descending, start ascending."""
        ...

    @abstractmethod
    def transition(
        self,
        reservation_id: int,
        target: ReservationStatus,
        now: datetime,
        organization_id: int | None = None,
        payment_status: PaymentStatus | None = None,
        cancel_reason: str | None = None,
    ) -> Reservation:
        """Move a locked reservation to `target`.

        Raises ReservationNotFoundError or InvalidTransitionError.
        """
        ...

    @abstractmethod
    def move_reservation(
        self,
        reservation_id: int,
        target_date: date,
        start: int,
        end: int,
        capacity: int,
        now: datetime,
        organization_id: int | None = None,
    ) -> Reservation:
        """Move a non-terminal reservation to another date and start.

        Locks the activity, re-sums overlapping party sizes without the
        reservation itself and raises CapacityExceededError if it would
        not fit. Terminal reservations raise InvalidTransitionError.
        """
        ...

    @abstractmethod
    def expire_pending(self, created_before: datetime, now: datetime) -> list[Reservation]:
        """Cancel pending reservations created before the cutoff."""
        ...
