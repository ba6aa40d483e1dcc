"""Planar geometry helpers for coverage areas.

All functions work on plain latitude/longitude degrees and treat the map as
flat (equirectangular). That is accurate enough for drawing coverage areas
and for deciding which sector an aircraft is in; it is not a geodesic
library.
"""

from __future__ import annotations

import math
from typing import Sequence

from activeatc.models.network import LatLng

KM_PER_DEGREE = 111.32
METERS_PER_DEGREE = 111320.0
STAR_INNER_RATIO = 0.3


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180].

    Values already in range are returned unchanged, so the function is
    idempotent.
    """

    if not math.isfinite(longitude):
        raise ValueError(f"Cannot normalize non-finite longitude {longitude!r}")

    normalized = longitude
    if abs(normalized) > 720:
        normalized = math.fmod(normalized, 360.0)
    while normalized < -180:
        normalized += 360
    while normalized > 180:
        normalized -= 360
    return normalized


def point_in_polygon(point: LatLng, polygon: Sequence[LatLng]) -> bool:
    """Even-odd ray casting test of ``point`` against a closed ring.

    The ring is implicitly closed (last vertex connects to the first). Rings
    with fewer than three vertices are never considered to contain anything.
    Edges whose endpoints share a latitude cannot straddle the point and are
    skipped. A point lying exactly on a vertex or edge gets whatever the
    crossing parity yields; the result is deterministic for a given ring.
    """

    count = len(polygon)
    if count < 3:
        return False
    if not (math.isfinite(point.latitude) and math.isfinite(point.longitude)):
        return False

    inside = False
    j = count - 1
    for i in range(count):
        vi, vj = polygon[i], polygon[j]
        j = i
        if vi.latitude == vj.latitude:
            continue
        if (vi.latitude > point.latitude) == (vj.latitude > point.latitude):
            continue
        crossing_lng = (vj.longitude - vi.longitude) * (point.latitude - vi.latitude) / (
            vj.latitude - vi.latitude
        ) + vi.longitude
        if point.longitude < crossing_lng:
            inside = not inside
    return inside


def unwrap_longitudes(polygon: Sequence[LatLng]) -> list[LatLng]:
    """Make consecutive vertex longitudes continuous across the antimeridian.

    Each vertex is shifted by a multiple of 360 degrees so it is within 180
    degrees of the previous one. A ring published as 170..190 and stored as
    170/-170 comes back as 170..190 again.
    """

    ring: list[LatLng] = []
    previous: float | None = None
    for vertex in polygon:
        longitude = vertex.longitude
        if previous is not None:
            while longitude - previous > 180:
                longitude -= 360
            while longitude - previous < -180:
                longitude += 360
        ring.append(LatLng(latitude=vertex.latitude, longitude=longitude))
        previous = longitude
    return ring


def point_in_unwrapped_polygon(point: LatLng, ring: Sequence[LatLng]) -> bool:
    """Ray cast ``point`` against a ring from :func:`unwrap_longitudes`.

    An unwrapped ring may extend past +/-180, so the point is also tried one
    revolution east and west.
    """

    for shift in (0.0, 360.0, -360.0):
        shifted = LatLng(latitude=point.latitude, longitude=point.longitude + shift)
        if point_in_polygon(shifted, ring):
            return True
    return False


def km_to_degrees(km: float) -> float:
    """Approximate a distance in kilometres as degrees of latitude."""

    return km / KM_PER_DEGREE


def star_coordinates(
    center: LatLng, radius_m: float, points: int, rotation: float = 0.0
) -> list[LatLng]:
    """Build a star-shaped ring around ``center``.

    The ring has ``2 * points`` vertices alternating between ``radius_m`` and
    ``STAR_INNER_RATIO * radius_m``, starting at the top (-90 degrees) plus
    ``rotation`` radians.
    """

    if points < 1:
        raise ValueError("A star needs at least one point")

    angle_increment = math.pi * 2 / (points * 2)
    lon_scale = METERS_PER_DEGREE * max(math.cos(math.radians(center.latitude)), 0.0001)

    ring: list[LatLng] = []
    for i in range(points * 2):
        angle = i * angle_increment - math.pi / 2 + rotation
        radius = radius_m if i % 2 == 0 else radius_m * STAR_INNER_RATIO
        ring.append(
            LatLng(
                latitude=center.latitude + (math.cos(angle) * radius) / METERS_PER_DEGREE,
                longitude=center.longitude + (math.sin(angle) * radius) / lon_scale,
            )
        )
    return ring


__all__ = [
    "KM_PER_DEGREE",
    "METERS_PER_DEGREE",
    "km_to_degrees",
    "normalize_longitude",
    "point_in_polygon",
    "point_in_unwrapped_polygon",
    "star_coordinates",
    "unwrap_longitudes",
]
