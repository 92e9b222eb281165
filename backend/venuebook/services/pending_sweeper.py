"""
Pending reservation expiry.

Periodically cancels reservations that stayed `pending` (unpaid) longer
than pending_ttl_minutes, releasing their capacity.

Runs as an asyncio task in backend lifespan.
Uses synchronous DB (via asyncio.to_thread).
Only ever moves pending → cancelled, so it is safe next to live booking traffic.
"""

import asyncio
import logging
from typing import Callable

from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..redis_client import redis_client
from ..stores.sql_store import SqlBookingStore
from .events import Notifier, RedisNotifier
from .reservations import BookingService
from .slots.config import BookingConfig, get_booking_config

logger = logging.getLogger(__name__)


async def pending_sweeper_loop(interval_seconds: int = 60) -> None:
    """
    Periodic loop that expires unpaid pending reservations.
    """
    logger.info("pending_sweeper_loop started")

    try:
        while True:
            try:
                await asyncio.to_thread(sweep_pending_once)
            except asyncio.CancelledError:
                logger.info("pending_sweeper_loop cancelled")
                raise
            except Exception:
                logger.exception("pending_sweeper_loop error")

            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        pass


def sweep_pending_once(
    session_factory: Callable[[], Session] = SessionLocal,
    notifier: Notifier | None = None,
    config: BookingConfig | None = None,
) -> int:
    """Run one expiry pass (synchronous). Returns the number expired."""
    db = session_factory()
    try:
        service = BookingService(
            SqlBookingStore(db),
            notifier or RedisNotifier(redis_client),
            config=config or get_booking_config(),
        )
        expired = service.expire_pending()
        if expired:
            logger.info(f"pending sweep: {expired} reservation(s) expired")
        return expired
    finally:
        db.close()
