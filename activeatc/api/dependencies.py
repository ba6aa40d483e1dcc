"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from activeatc.services import AirportLookup, RefreshCoordinator, get_airport_lookup

logger = logging.getLogger("activeatc.api")


def get_coordinator(request: Request) -> RefreshCoordinator:
    """Return the coordinator created by the application lifespan."""

    coordinator: RefreshCoordinator | None = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        logger.error("Refresh coordinator is not configured; rejecting request")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Traffic snapshot unavailable",
        )
    return coordinator


def get_airports() -> AirportLookup:
    return get_airport_lookup()


__all__ = ["get_airports", "get_coordinator"]
