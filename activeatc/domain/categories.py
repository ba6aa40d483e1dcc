"""Operational position categories reported for ATC stations."""

from __future__ import annotations

from enum import Enum


class StationCategory(str, Enum):
    """ATC position types as reported by the tracker."""

    APPROACH = "APP"
    CENTER = "CTR"
    DELIVERY = "DEL"
    GROUND = "GND"
    TOWER = "TWR"
    FLIGHT_SERVICE = "FSS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "StationCategory":
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return cls.UNKNOWN

    @property
    def is_area(self) -> bool:
        """True for categories that own an area of control."""

        return self in AREA_CATEGORIES


AREA_CATEGORIES: frozenset[StationCategory] = frozenset(
    {StationCategory.CENTER, StationCategory.FLIGHT_SERVICE}
)

__all__ = ["StationCategory", "AREA_CATEGORIES"]
