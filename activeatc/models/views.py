"""Response models for the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from activeatc.domain import StationCategory
from activeatc.models.network import LatLng
from activeatc.models.traffic import TrafficCount


class GeometryView(BaseModel):
    """Coverage geometry ready to draw on a map."""

    kind: Literal["circle", "star", "polygon"] = Field(..., description="Shape type")
    center: Optional[LatLng] = Field(default=None, description="Centre of fixed shapes")
    radius_m: Optional[float] = Field(default=None, description="Circle radius in meters")
    ring: list[LatLng] = Field(
        default_factory=list, description="Closed ring of vertices for stars and polygons"
    )


class StationSummary(BaseModel):
    """List entry for an active station."""

    callsign: str
    category: StationCategory
    latitude: float
    longitude: float
    frequency: Optional[float] = None
    country: str = Field(..., description="Country display name")
    flag: str = Field(..., description="Lowercase ISO code of the country flag")
    online: str = Field(..., description="Time online as HH:MM:SS")
    traffic: TrafficCount


class StationListResponse(BaseModel):
    """Stations matching a search, with snapshot metadata."""

    count: int
    updated_at: Optional[datetime] = None
    stations: list[StationSummary]


class StationDetail(StationSummary):
    """Detail view for a single station."""

    name: str = Field(..., description="Station name from the coverage summary")
    atis_revision: Optional[str] = None
    atis_lines: list[str] = Field(default_factory=list)
    viewport_span: float = Field(..., description="Map span in degrees")
    geometry: Optional[GeometryView] = None


class RouteView(BaseModel):
    """Route of a selected pilot."""

    callsign: str
    departure_id: str
    arrival_id: str
    departure: LatLng
    current: LatLng
    arrival: LatLng
    eet: Optional[str] = Field(default=None, description="Estimated en-route time HH:MM")
    summary: str


class RefreshResponse(BaseModel):
    """Outcome of a refresh cycle."""

    trigger: str
    stations: int
    pilots: int
    coverage_records: int
    refreshed_at: Optional[datetime] = None


__all__ = [
    "GeometryView",
    "RefreshResponse",
    "RouteView",
    "StationDetail",
    "StationListResponse",
    "StationSummary",
]
