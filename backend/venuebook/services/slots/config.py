# backend/venuebook/services/slots/config.py
"""
Booking configuration for availability and booking.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the availability/booking engine.

    Attributes:
        min_lead_minutes: Slots starting sooner than now + lead are "past" (0 = none)
        pending_ttl_minutes: Unpaid pending reservations older than this are cancelled
        timezone: Venue timezone used for "today" and the current clock time
    """
    min_lead_minutes: int = 0
    pending_ttl_minutes: int = 15
    timezone: str = "UTC"

    def __post_init__(self):
        """Validate configuration."""
        if self.min_lead_minutes < 0:
            raise ValueError(f"min_lead_minutes cannot be negative, got {self.min_lead_minutes}")
        if self.pending_ttl_minutes <= 0:
            raise ValueError(f"pending_ttl_minutes must be positive, got {self.pending_ttl_minutes}")

    def now(self) -> datetime:
        """Current venue-local wall clock time (naive)."""
        return datetime.now(ZoneInfo(self.timezone)).replace(tzinfo=None)


@lru_cache
def get_booking_config() -> BookingConfig:
    """
    Get booking configuration (singleton), built from application settings.
    """
    from ...config import settings

    return BookingConfig(
        min_lead_minutes=settings.min_lead_minutes,
        pending_ttl_minutes=settings.pending_ttl_minutes,
        timezone=settings.timezone,
    )
