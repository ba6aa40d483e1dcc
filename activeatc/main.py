from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from activeatc.api import api_router
from activeatc.config import settings
from activeatc.services import RefreshCoordinator

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("activeatc")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    coordinator: RefreshCoordinator | None = getattr(app.state, "coordinator", None)
    if coordinator is None:
        coordinator = RefreshCoordinator()
        app.state.coordinator = coordinator

    if settings.enable_refresh_loop:
        # Initial load doubles as the first foreground event.
        await coordinator.start()
        logger.info(
            "Refresh loop started (interval=%ss)", coordinator.interval
        )

    try:
        yield
    finally:
        await coordinator.stop()


app = FastAPI(title="Active ATC", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)

