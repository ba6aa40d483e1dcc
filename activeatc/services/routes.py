"""Route data for drawing a pilot's departure, position and destination."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from activeatc.models.network import LatLng, Pilot
from activeatc.services.airports import AirportLookup
from activeatc.services.presentation import format_hhmm

logger = logging.getLogger("activeatc.routes")


@dataclass(frozen=True)
class RouteData:
    """Endpoints of a pilot's route plus the current position."""

    callsign: str
    departure_id: str
    arrival_id: str
    departure: LatLng
    current: LatLng
    arrival: LatLng


def build_route(pilot: Pilot, airports: AirportLookup) -> Optional[RouteData]:
    """Resolve the route for ``pilot``; None when any piece is unknown."""

    plan = pilot.flight_plan
    track = pilot.last_track
    if plan is None or track is None:
        return None
    if not plan.departure_id or not plan.arrival_id:
        return None

    departure = airports.coordinates_for(plan.departure_id)
    if departure is None:
        logger.debug("Unknown departure %s for %s", plan.departure_id, pilot.callsign)
        return None
    arrival = airports.coordinates_for(plan.arrival_id)
    if arrival is None:
        logger.debug("Unknown arrival %s for %s", plan.arrival_id, pilot.callsign)
        return None

    return RouteData(
        callsign=pilot.callsign,
        departure_id=plan.departure_id,
        arrival_id=plan.arrival_id,
        departure=departure,
        current=track.position,
        arrival=arrival,
    )


def flight_summary(pilot: Pilot) -> str:
    """Multi-line summary shown when a pilot is selected on the map."""

    plan = pilot.flight_plan
    track = pilot.last_track
    if plan is None or track is None:
        return f"No flight plan or track data available for {pilot.callsign}"

    eet = format_hhmm(plan.eet) if plan.eet is not None else "N/A"
    altitude = track.altitude if track.altitude is not None else "N/A"
    return (
        f"Callsign: {pilot.callsign} | From/To: {plan.departure_id or 'N/A'} -> "
        f"{plan.arrival_id or 'N/A'}\n"
        f"Speed: {plan.speed or 'N/A'} | Flight Level: {plan.level or 'N/A'} | "
        f"Altitude: {altitude} ft | EET: {eet}\n"
        f"Route: {plan.route or ''}"
    )


__all__ = ["RouteData", "build_route", "flight_summary"]
