from .interfaces import BookingStore
from .sql_store import SqlBookingStore, parse_schedule

__all__ = ["BookingStore", "SqlBookingStore", "parse_schedule"]
