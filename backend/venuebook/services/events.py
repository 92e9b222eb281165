"""
backend/venuebook/services/events.py

Event emitter: pushes booking events to a Redis queue for the
notification workers (email/SMS delivery lives outside this service).

Queue:
- events:p2p: instant delivery (booking notifications to one customer)

Delivery is best-effort: a failed push is logged and never affects
the reservation that triggered it.
"""

import json
import time
import logging
from typing import Protocol

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

P2P_QUEUE = "events:p2p"


class Notifier(Protocol):
    def notify(self, event_type: str, payload: dict) -> None:
        ...


def emit_event(redis: Redis, event_type: str, payload: dict) -> None:
    """
    Emit a p2p event (instant delivery).

    Pushed to Redis list `events:p2p` for the consumer loop.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis.rpush(P2P_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {P2P_QUEUE}")
    except RedisError as e:
        logger.error(f"Failed to emit event {event_type}: {e}")


class RedisNotifier:
    """Notifier backed by the Redis event queue."""

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    def notify(self, event_type: str, payload: dict) -> None:
        emit_event(self.redis, event_type, payload)
