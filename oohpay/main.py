"""
FastAPI application for the OOH compensation service.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from oohpay.config import settings
from oohpay.infrastructure.observability.logging import get_logger, log_request, setup_logging
from oohpay.routes import analytics, compensation, health

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown."""
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        default_weekday_rate=settings.DEFAULT_WEEKDAY_RATE,
        default_weekend_rate=settings.DEFAULT_WEEKEND_RATE,
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="OOH Pay",
    description="Out-of-hours on-call compensation for PagerDuty schedules",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(compensation.router)
app.include_router(analytics.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )

    return response
