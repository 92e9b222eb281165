# backend/venuebook/main.py

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from .config import settings
from .domain import DomainError, ErrorCode
from .redis_client import redis_client
from .routers import availability, bookings, internal
from .services.pending_sweeper import pending_sweeper_loop

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_FORMAT: 400,
    ErrorCode.INVALID_PARTY_SIZE: 400,
    ErrorCode.ACTIVITY_NOT_FOUND: 404,
    ErrorCode.SLOT_NOT_FOUND: 404,
    ErrorCode.RESERVATION_NOT_FOUND: 404,
    ErrorCode.SLOT_UNAVAILABLE: 409,
    ErrorCode.CAPACITY_EXCEEDED: 409,
    ErrorCode.INVALID_TRANSITION: 409,
    ErrorCode.PERSISTENCE_FAILED: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)

    sweeper = None
    if settings.sweep_enabled:
        sweeper = asyncio.create_task(pending_sweeper_loop(settings.sweep_interval_seconds))

    yield

    if sweeper is not None:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


app = FastAPI(title="Venue Booking API", lifespan=lifespan)

app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(internal.router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status_code = ERROR_STATUS.get(exc.code, 400)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code.value, "detail": exc.message},
    )


@app.get("/health")
def health():
    try:
        redis_ok = bool(redis_client.ping())
    except RedisError:
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}
