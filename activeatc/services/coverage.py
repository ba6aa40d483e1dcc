"""Resolve the coverage geometry a station controls."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Iterable, Literal, Mapping, Optional, Union

from activeatc.domain import StationCategory
from activeatc.models.coverage import CoverageRecord, RegionPoint
from activeatc.models.network import LatLng, Station
from activeatc.services.geometry import (
    METERS_PER_DEGREE,
    km_to_degrees,
    normalize_longitude,
    star_coordinates,
)

logger = logging.getLogger("activeatc.coverage")

TOWER_RADIUS_KM = 9.3
STAR_POINTS = 4
GROUND_ROTATION = 0.0
DELIVERY_ROTATION = math.pi / 4


@dataclass(frozen=True)
class FixedShape:
    """Fixed-radius marker centred on the station (tower circle or star)."""

    center: LatLng
    radius_deg: float
    kind: Literal["circle", "star"]
    ring: tuple[LatLng, ...] = field(default_factory=tuple)

    @property
    def radius_m(self) -> float:
        return self.radius_deg * METERS_PER_DEGREE


@dataclass(frozen=True)
class PolygonCoverage:
    """Coverage polygon published for the station."""

    vertices: tuple[LatLng, ...]


Geometry = Union[FixedShape, PolygonCoverage, None]


def coverage_index(records: Iterable[CoverageRecord]) -> dict[str, CoverageRecord]:
    """Map callsigns to their coverage record, keeping the first duplicate."""

    index: dict[str, CoverageRecord] = {}
    for record in records:
        if record.callsign in index:
            logger.debug("Duplicate coverage record for %s ignored", record.callsign)
            continue
        index[record.callsign] = record
    return index


def _to_vertices(region_map: list[RegionPoint]) -> tuple[LatLng, ...]:
    vertices: list[LatLng] = []
    for point in region_map:
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            continue
        vertices.append(
            LatLng(latitude=point.lat, longitude=normalize_longitude(point.lng))
        )
    return tuple(vertices)


def _polygon_for(record: CoverageRecord, prefer_subcenter: bool) -> Optional[PolygonCoverage]:
    own = record.atc_position.region_map if record.atc_position else []
    sub = record.subcenter.region_map if record.subcenter else []

    region_map = (sub or own) if prefer_subcenter else own
    if not region_map:
        return None
    vertices = _to_vertices(region_map)
    if not vertices:
        return None
    return PolygonCoverage(vertices=vertices)


def _fixed_shape(station: Station) -> FixedShape:
    center = station.position
    radius_deg = km_to_degrees(TOWER_RADIUS_KM)
    category = station.category

    if category is StationCategory.TOWER:
        return FixedShape(center=center, radius_deg=radius_deg, kind="circle")

    rotation = GROUND_ROTATION if category is StationCategory.GROUND else DELIVERY_ROTATION
    ring = star_coordinates(
        center, radius_deg * METERS_PER_DEGREE, points=STAR_POINTS, rotation=rotation
    )
    return FixedShape(center=center, radius_deg=radius_deg, kind="star", ring=tuple(ring))


def resolve_coverage(
    station: Station,
    records: Union[Mapping[str, CoverageRecord], Iterable[CoverageRecord]],
) -> Geometry:
    """Return the geometry used to draw and aggregate traffic for ``station``.

    Towers, ground and delivery positions get a fixed shape around the
    station's own position and do not need a coverage record. Approach uses
    the record's own polygon; center and flight service prefer the subcenter
    polygon. The category always comes from the live station.
    """

    category = station.category
    if category in (StationCategory.TOWER, StationCategory.GROUND, StationCategory.DELIVERY):
        return _fixed_shape(station)
    if category is StationCategory.UNKNOWN:
        return None

    index = records if isinstance(records, Mapping) else coverage_index(records)
    record = index.get(station.callsign)
    if record is None:
        return None

    if category is StationCategory.APPROACH:
        return _polygon_for(record, prefer_subcenter=False)
    return _polygon_for(record, prefer_subcenter=True)


__all__ = [
    "DELIVERY_ROTATION",
    "FixedShape",
    "Geometry",
    "GROUND_ROTATION",
    "PolygonCoverage",
    "TOWER_RADIUS_KM",
    "coverage_index",
    "resolve_coverage",
]
