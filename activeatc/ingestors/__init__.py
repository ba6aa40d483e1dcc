"""Data ingestors for the Active ATC service."""

from .summary import CoverageIngestor
from .whazzup import WhazzupIngestor, fetch_json

__all__ = [
    "CoverageIngestor",
    "WhazzupIngestor",
    "fetch_json",
]
