"""Service-layer helpers for the Active ATC service."""

from .airports import AirportLookup, get_airport_lookup
from .countries import Country, CountryDirectory
from .coverage import FixedShape, Geometry, PolygonCoverage, coverage_index, resolve_coverage
from .geometry import (
    km_to_degrees,
    normalize_longitude,
    point_in_polygon,
    point_in_unwrapped_polygon,
    star_coordinates,
    unwrap_longitudes,
)
from .refresh import RefreshCoordinator, RefreshTrigger, TrafficSnapshot
from .routes import RouteData, build_route, flight_summary
from .traffic import airport_prefix, compute_traffic_counts

__all__ = [
    "AirportLookup",
    "Country",
    "CountryDirectory",
    "FixedShape",
    "Geometry",
    "PolygonCoverage",
    "RefreshCoordinator",
    "RefreshTrigger",
    "RouteData",
    "TrafficSnapshot",
    "airport_prefix",
    "build_route",
    "compute_traffic_counts",
    "coverage_index",
    "flight_summary",
    "get_airport_lookup",
    "km_to_degrees",
    "normalize_longitude",
    "point_in_polygon",
    "point_in_unwrapped_polygon",
    "resolve_coverage",
    "star_coordinates",
    "unwrap_longitudes",
]
