"""Pilot route endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from activeatc.models import RouteView
from activeatc.services import AirportLookup, RefreshCoordinator, build_route, flight_summary
from activeatc.services.presentation import format_hhmm

from .dependencies import get_airports, get_coordinator

router = APIRouter(prefix="/api/v1", tags=["pilots"])


@router.get(
    "/pilots/{callsign}/route",
    response_model=RouteView,
    summary="Departure, current position and arrival of a pilot",
)
async def get_pilot_route(
    callsign: str,
    coordinator: RefreshCoordinator = Depends(get_coordinator),
    airports: AirportLookup = Depends(get_airports),
) -> RouteView:
    pilot = coordinator.snapshot.find_pilot(callsign.upper())
    if pilot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Pilot {callsign} is not online"
        )

    route = build_route(pilot, airports)
    if route is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Route for {pilot.callsign} could not be resolved",
        )

    eet = pilot.flight_plan.eet if pilot.flight_plan else None
    return RouteView(
        callsign=route.callsign,
        departure_id=route.departure_id,
        arrival_id=route.arrival_id,
        departure=route.departure,
        current=route.current,
        arrival=route.arrival,
        eet=format_hhmm(eet) if eet is not None else None,
        summary=flight_summary(pilot),
    )
