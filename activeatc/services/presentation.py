"""Helpers that shape snapshot data for list and detail views."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from activeatc.domain import StationCategory
from activeatc.models.coverage import CoverageRecord
from activeatc.models.network import Station

# Map viewport (latitude/longitude delta in degrees) per position type.
_VIEWPORT_SPANS: dict[StationCategory, float] = {
    StationCategory.TOWER: 0.3,
    StationCategory.GROUND: 0.3,
    StationCategory.DELIVERY: 0.3,
    StationCategory.APPROACH: 2.5,
    StationCategory.CENTER: 25.0,
    StationCategory.FLIGHT_SERVICE: 25.0,
}
DEFAULT_VIEWPORT_SPAN = 0.5


def filter_stations(stations: Iterable[Station], search: Optional[str]) -> list[Station]:
    """Stations whose callsign starts with ``search`` (case-insensitive)."""

    query = (search or "").strip().upper()
    if not query:
        return list(stations)
    return [station for station in stations if station.callsign.startswith(query)]


def viewport_span(category: StationCategory) -> float:
    return _VIEWPORT_SPANS.get(category, DEFAULT_VIEWPORT_SPAN)


def station_display_name(callsign: str, coverage: Mapping[str, CoverageRecord]) -> str:
    """Human-readable station name from the coverage summary."""

    record = coverage.get(callsign)
    if record is None:
        return "Station Not Found"
    if record.atc_session.position.is_area:
        if record.subcenter and record.subcenter.atc_callsign:
            return record.subcenter.atc_callsign
        return "Unknown CTR/FSS"
    if record.atc_position and record.atc_position.atc_callsign:
        return record.atc_position.atc_callsign
    return "Unknown Station"


def format_hhmmss(total_seconds: int) -> str:
    total_seconds = max(int(total_seconds), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hhmm(total_seconds: int) -> str:
    total_seconds = max(int(total_seconds), 0)
    hours, remainder = divmod(total_seconds, 3600)
    return f"{hours:02d}:{remainder // 60:02d}"


__all__ = [
    "DEFAULT_VIEWPORT_SPAN",
    "filter_stations",
    "format_hhmm",
    "format_hhmmss",
    "station_display_name",
    "viewport_span",
]
