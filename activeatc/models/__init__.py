"""Pydantic models for the Active ATC service."""

from .coverage import AtcPosition, CoverageRecord, RegionPoint, Subcenter
from .network import AtcSession, Atis, FlightPlan, LastTrack, LatLng, NetworkClients, Pilot, Station
from .traffic import TrafficCount
from .views import (
    GeometryView,
    RefreshResponse,
    RouteView,
    StationDetail,
    StationListResponse,
    StationSummary,
)

__all__ = [
    "AtcPosition",
    "AtcSession",
    "Atis",
    "CoverageRecord",
    "FlightPlan",
    "GeometryView",
    "LastTrack",
    "LatLng",
    "NetworkClients",
    "Pilot",
    "RefreshResponse",
    "RegionPoint",
    "RouteView",
    "Station",
    "StationDetail",
    "StationListResponse",
    "StationSummary",
    "Subcenter",
    "TrafficCount",
]
