# backend/venuebook/dependencies.py
"""
FastAPI dependencies that assemble request-scoped services.

Services are built per request from the request's DB session; nothing
is shared between requests. Tests swap collaborators through
app.dependency_overrides.
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .database import get_db
from .redis_client import redis_client
from .services.events import Notifier, RedisNotifier
from .services.reservations import BookingService
from .services.slots import AvailabilityService, BookingConfig, get_booking_config
from .stores import BookingStore, SqlBookingStore


def get_store(db: Session = Depends(get_db)) -> BookingStore:
    return SqlBookingStore(db)


def get_notifier() -> Notifier:
    return RedisNotifier(redis_client)


def get_config() -> BookingConfig:
    return get_booking_config()


def get_clock(config: BookingConfig = Depends(get_config)) -> Callable[[], datetime]:
    return config.now


def get_organization_id(x_organization_id: int = Header(...)) -> int:
    """Tenant of the caller. Authentication itself happens upstream."""
    return x_organization_id


def get_availability_service(
    store: BookingStore = Depends(get_store),
    config: BookingConfig = Depends(get_config),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AvailabilityService:
    return AvailabilityService(store, config, clock)


def get_booking_service(
    store: BookingStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
    availability: AvailabilityService = Depends(get_availability_service),
    config: BookingConfig = Depends(get_config),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> BookingService:
    return BookingService(store, notifier, availability, config, clock)
