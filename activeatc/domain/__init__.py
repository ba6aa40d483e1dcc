"""Domain enumerations for the Active ATC service."""

from .categories import AREA_CATEGORIES, StationCategory

__all__ = ["AREA_CATEGORIES", "StationCategory"]
