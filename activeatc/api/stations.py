"""Station list and detail endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from activeatc.models import (
    GeometryView,
    Station,
    StationDetail,
    StationListResponse,
    StationSummary,
)
from activeatc.services import (
    FixedShape,
    Geometry,
    PolygonCoverage,
    RefreshCoordinator,
    TrafficSnapshot,
    resolve_coverage,
)
from activeatc.services.presentation import (
    filter_stations,
    format_hhmmss,
    station_display_name,
    viewport_span,
)

from .dependencies import get_coordinator

router = APIRouter(prefix="/api/v1", tags=["stations"])

logger = logging.getLogger("activeatc.stations")


def _summary_fields(station: Station, snapshot: TrafficSnapshot) -> dict:
    return {
        "callsign": station.callsign,
        "category": station.category,
        "latitude": station.latitude,
        "longitude": station.longitude,
        "frequency": station.atc_session.frequency,
        "country": snapshot.countries.country_name(station.callsign),
        "flag": snapshot.countries.flag_code(station.callsign),
        "online": format_hhmmss(station.last_track.time),
        "traffic": snapshot.traffic_for(station.callsign),
    }


def _geometry_view(geometry: Geometry) -> Optional[GeometryView]:
    if isinstance(geometry, FixedShape):
        return GeometryView(
            kind=geometry.kind,
            center=geometry.center,
            radius_m=geometry.radius_m if geometry.kind == "circle" else None,
            ring=list(geometry.ring),
        )
    if isinstance(geometry, PolygonCoverage):
        return GeometryView(kind="polygon", ring=list(geometry.vertices))
    return None


@router.get(
    "/stations",
    response_model=StationListResponse,
    summary="List active ATC stations with traffic counts",
)
async def list_stations(
    search: Optional[str] = Query(
        default=None, description="Callsign prefix to filter stations"
    ),
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> StationListResponse:
    snapshot = coordinator.snapshot
    stations = filter_stations(snapshot.stations, search)
    return StationListResponse(
        count=len(stations),
        updated_at=snapshot.updated_at,
        stations=[StationSummary(**_summary_fields(s, snapshot)) for s in stations],
    )


@router.get(
    "/stations/{callsign}",
    response_model=StationDetail,
    summary="Get a single station with its coverage geometry",
)
async def get_station(
    callsign: str,
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> StationDetail:
    snapshot = coordinator.snapshot
    station = snapshot.find_station(callsign.upper())
    if station is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Station {callsign} is not online"
        )

    geometry = resolve_coverage(station, snapshot.coverage)
    atis = station.atis
    return StationDetail(
        **_summary_fields(station, snapshot),
        name=station_display_name(station.callsign, snapshot.coverage),
        atis_revision=atis.revision if atis else None,
        atis_lines=(atis.lines or []) if atis else [],
        viewport_span=viewport_span(station.category),
        geometry=_geometry_view(geometry),
    )
