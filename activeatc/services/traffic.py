"""Aggregate live traffic against ATC stations.

Area stations (center, flight service) count aircraft whose last position is
inside their coverage polygon. Every other station counts flights departing
from or arriving at its airport, matched on the 4-character airport prefix of
the callsign (``LTBA_TWR`` -> ``LTBA``).

The computation is pure and synchronous; it is re-run from scratch for each
snapshot.
"""

from __future__ import annotations

from collections import Counter
import logging
from typing import Iterable, Mapping, Optional, Sequence

from activeatc.models.coverage import CoverageRecord
from activeatc.models.network import LatLng, Pilot, Station
from activeatc.models.traffic import TrafficCount
from activeatc.services.coverage import PolygonCoverage, coverage_index, resolve_coverage
from activeatc.services.geometry import (
    normalize_longitude,
    point_in_unwrapped_polygon,
    unwrap_longitudes,
)

logger = logging.getLogger("activeatc.traffic")

AIRPORT_PREFIX_LENGTH = 4


def airport_prefix(code: Optional[str]) -> Optional[str]:
    """Return the leading airport identifier, or None if the code is too short."""

    if not code or len(code) < AIRPORT_PREFIX_LENGTH:
        return None
    return code[:AIRPORT_PREFIX_LENGTH]


def _pilot_positions(pilots: Iterable[Pilot]) -> list[LatLng]:
    positions: list[LatLng] = []
    for pilot in pilots:
        track = pilot.last_track
        if track is None:
            continue
        try:
            longitude = normalize_longitude(track.longitude)
        except ValueError:
            logger.debug("Skipping pilot %s with invalid position", pilot.callsign)
            continue
        positions.append(LatLng(latitude=track.latitude, longitude=longitude))
    return positions


def _prefix_buckets(pilots: Iterable[Pilot]) -> tuple[Counter[str], Counter[str]]:
    departures: Counter[str] = Counter()
    arrivals: Counter[str] = Counter()
    for pilot in pilots:
        plan = pilot.flight_plan
        if plan is None:
            continue
        departure = airport_prefix(plan.departure_id)
        arrival = airport_prefix(plan.arrival_id)
        if departure:
            departures[departure] += 1
        if arrival:
            arrivals[arrival] += 1
    return departures, arrivals


def count_in_region(polygon: PolygonCoverage, positions: Sequence[LatLng]) -> int:
    """Number of positions inside ``polygon``.

    The polygon is unwrapped first so rings crossing the antimeridian keep
    their interior.
    """

    ring = unwrap_longitudes(polygon.vertices)
    return sum(1 for position in positions if point_in_unwrapped_polygon(position, ring))


def compute_traffic_counts(
    stations: Sequence[Station],
    pilots: Sequence[Pilot],
    coverage_records: Iterable[CoverageRecord] | Mapping[str, CoverageRecord],
) -> dict[str, TrafficCount]:
    """Compute a traffic count for every station callsign.

    Every station appears in the result. Stations without matching traffic or
    without resolvable geometry get an all-zero count.
    """

    index = (
        coverage_records
        if isinstance(coverage_records, Mapping)
        else coverage_index(coverage_records)
    )
    positions: list[LatLng] | None = None
    departures, arrivals = _prefix_buckets(pilots)

    counts: dict[str, TrafficCount] = {}
    for station in stations:
        if station.category.is_area:
            geometry = resolve_coverage(station, index)
            in_region = 0
            if isinstance(geometry, PolygonCoverage):
                if positions is None:
                    positions = _pilot_positions(pilots)
                in_region = count_in_region(geometry, positions)
            counts[station.callsign] = TrafficCount(in_region=in_region)
            continue

        prefix = airport_prefix(station.callsign)
        if prefix is None:
            counts[station.callsign] = TrafficCount()
            continue
        counts[station.callsign] = TrafficCount(
            inbound=arrivals.get(prefix, 0),
            outbound=departures.get(prefix, 0),
        )

    logger.debug(
        "Computed traffic counts for %s stations from %s pilots", len(counts), len(pilots)
    )
    return counts


__all__ = [
    "AIRPORT_PREFIX_LENGTH",
    "airport_prefix",
    "compute_traffic_counts",
    "count_in_region",
]
