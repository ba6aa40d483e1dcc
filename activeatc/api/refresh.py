"""Manual and foreground refresh triggers."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query

from activeatc.models import RefreshResponse
from activeatc.services import RefreshCoordinator, RefreshTrigger

from .dependencies import get_coordinator

router = APIRouter(prefix="/api/v1", tags=["refresh"])

logger = logging.getLogger("activeatc.api.refresh")


@router.post("/refresh", response_model=RefreshResponse, summary="Refresh the traffic snapshot")
async def refresh_snapshot(
    trigger: Literal["manual", "foreground"] = Query(
        default="manual", description="Event that caused the refresh"
    ),
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> RefreshResponse:
    """Run a refresh cycle now and restart the periodic timer."""

    snapshot = await coordinator.trigger(RefreshTrigger(trigger))
    logger.info("Refresh requested via API (trigger=%s)", trigger)
    return RefreshResponse(
        trigger=trigger,
        stations=len(snapshot.stations),
        pilots=len(snapshot.pilots),
        coverage_records=len(snapshot.coverage_records),
        refreshed_at=snapshot.refreshed_at,
    )
