"""Pytest configuration and shared fixtures."""

import json
import os
from datetime import date, datetime

# Must be set before venuebook.config is imported
os.environ.setdefault("VENUEBOOK_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("VENUEBOOK_SWEEP_ENABLED", "false")

import pytest
from sqlalchemy.orm import sessionmaker

from venuebook.database import create_db_engine
from venuebook.domain.timeutils import time_to_minutes
from venuebook.models import (
    Activities,
    ActivityBlocks,
    Base,
    Customers,
    Organizations,
    Reservations,
)
from venuebook.services.reservations import BookingService, generate_confirmation_code
from venuebook.services.slots import AvailabilityService, BookingConfig
from venuebook.stores import SqlBookingStore

from booking_data import FIXED_NOW, WEEKDAY_SCHEDULE


class RecordingNotifier:
    """Notifier that keeps emitted events in memory."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def notify(self, event_type: str, payload: dict) -> None:
        self.events.append((event_type, payload))

    @property
    def types(self) -> list[str]:
        return [event_type for event_type, _ in self.events]


class Seeder:
    """
    Inserts rows directly, bypassing the booking engine.

    Ids are read before commit: touching a row afterwards would reopen a
    BEGIN IMMEDIATE transaction and lock out other sessions.
    """

    def __init__(self, db):
        self.db = db

    def organization(self, name: str = "Downtown Escape Rooms") -> int:
        row = Organizations(name=name)
        self.db.add(row)
        self.db.flush()
        row_id = row.id
        self.db.commit()
        return row_id

    def activity(
        self,
        organization_id: int,
        schedule: dict | None = None,
        duration_minutes: int = 60,
        capacity: int | None = 4,
        min_party_size: int = 1,
        max_party_size: int = 8,
        price: float = 25.0,
        is_active: bool = True,
        name: str = "Laser Maze",
    ) -> int:
        row = Activities(
            organization_id=organization_id,
            name=name,
            duration_minutes=duration_minutes,
            min_party_size=min_party_size,
            max_party_size=max_party_size,
            capacity=capacity,
            price=price,
            is_active=1 if is_active else 0,
            schedule=json.dumps(schedule if schedule is not None else WEEKDAY_SCHEDULE),
        )
        self.db.add(row)
        self.db.flush()
        row_id = row.id
        self.db.commit()
        return row_id

    def block(
        self,
        activity_id: int,
        day: date,
        start_time: str | None = None,
        end_time: str | None = None,
        reason: str | None = None,
    ) -> int:
        row = ActivityBlocks(
            activity_id=activity_id,
            date=day,
            start_time=start_time,
            end_time=end_time,
            reason=reason,
        )
        self.db.add(row)
        self.db.flush()
        row_id = row.id
        self.db.commit()
        return row_id

    def customer(self, organization_id: int, email: str = "guest@example.com") -> int:
        row = Customers(organization_id=organization_id, email=email)
        self.db.add(row)
        self.db.flush()
        row_id = row.id
        self.db.commit()
        return row_id

    def reservation(
        self,
        activity_id: int,
        day: date,
        start_time: str,
        party_size: int,
        status: str = "confirmed",
        duration_minutes: int = 60,
        created_at: datetime = FIXED_NOW,
        customer_email: str | None = None,
    ) -> int:
        activity = self.db.get(Activities, activity_id)
        email = customer_email or f"seed-{generate_confirmation_code().lower()}@example.com"
        customer_id = self.customer(activity.organization_id, email)
        start = time_to_minutes(start_time)
        row = Reservations(
            organization_id=activity.organization_id,
            activity_id=activity_id,
            customer_id=customer_id,
            confirmation_code=generate_confirmation_code(),
            date=day,
            start_minute=start,
            end_minute=start + duration_minutes,
            party_size=party_size,
            status=status,
            payment_status="paid" if status == "confirmed" else "pending",
            total_amount=0,
            created_at=created_at,
            updated_at=created_at,
        )
        self.db.add(row)
        self.db.flush()
        row_id = row.id
        self.db.commit()
        return row_id


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'venuebook.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)


@pytest.fixture
def org_id(seed) -> int:
    return seed.organization()


@pytest.fixture
def activity_id(seed, org_id) -> int:
    return seed.activity(org_id)


@pytest.fixture
def config() -> BookingConfig:
    return BookingConfig()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store(db) -> SqlBookingStore:
    return SqlBookingStore(db)


@pytest.fixture
def availability(store, config, clock) -> AvailabilityService:
    return AvailabilityService(store, config, clock)


@pytest.fixture
def booking_service(store, notifier, availability, config, clock) -> BookingService:
    return BookingService(store, notifier, availability, config, clock)
