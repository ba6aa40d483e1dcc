"""Airport coordinate lookup backed by a local SQLite database."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from activeatc.config import settings
from activeatc.models.network import LatLng

logger = logging.getLogger("activeatc.airports")

_COORDINATES_QUERY = text(
    "SELECT latitude_deg, longitude_deg FROM airports WHERE ident = :ident"
)


class AirportLookup:
    """Resolve airport identifiers to coordinates.

    The service only reads from the database; it never writes to
    it. A missing table or file makes every lookup a miss.
    """

    def __init__(self, db_url: str | None = None, *, engine: Engine | None = None) -> None:
        self.db_url = db_url or settings.airports_db_url
        self.engine = engine or create_engine(
            self.db_url,
            connect_args={"check_same_thread": False}
            if self.db_url.startswith("sqlite")
            else {},
        )

    def coordinates_for(self, airport_code: str) -> Optional[LatLng]:
        """Return the coordinates of ``airport_code`` or None when unknown."""

        if not airport_code:
            return None
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    _COORDINATES_QUERY, {"ident": airport_code.upper()}
                ).first()
        except SQLAlchemyError as exc:
            logger.warning("Airport lookup for %s failed: %s", airport_code, exc)
            return None

        if row is None:
            logger.debug("No coordinates found for airport %s", airport_code)
            return None
        return LatLng(latitude=float(row[0]), longitude=float(row[1]))


@lru_cache(maxsize=1)
def get_airport_lookup() -> AirportLookup:
    return AirportLookup()


__all__ = ["AirportLookup", "get_airport_lookup"]
