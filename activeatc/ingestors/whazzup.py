"""Ingestor for the tracker's live station and pilot snapshot."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from activeatc.config import settings
from activeatc.models.network import NetworkClients, Pilot, Station

logger = logging.getLogger("activeatc.ingestors.whazzup")

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _parse_timestamp(raw_ts: Any) -> datetime | None:
    if not isinstance(raw_ts, str) or not raw_ts:
        return None
    if raw_ts.endswith("Z"):
        raw_ts = raw_ts.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(raw_ts)
    except ValueError:
        logger.debug("Failed to parse snapshot timestamp: %s", raw_ts)
        return None


def _validate_entries(entries: Any, model: type[_ModelT], kind: str) -> list[_ModelT]:
    if not isinstance(entries, list):
        return []

    parsed: list[_ModelT] = []
    for entry in entries:
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed %s record: %s", kind, exc)
    return parsed


async def fetch_json(
    url: str,
    *,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
    source: str,
) -> Optional[Any]:
    """GET ``url`` and return the decoded JSON body, or None on any failure."""

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("%s request timed out: %s", source, exc)
        return None
    except httpx.RequestError as exc:
        logger.warning("%s request failed: %s", source, exc)
        return None

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "%s returned HTTP %s: %s", source, exc.response.status_code, exc
        )
        return None

    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Failed to parse %s JSON response: %s", source, exc)
        return None


class WhazzupIngestor:
    """Fetch the current stations and pilots connected to the network."""

    def __init__(
        self,
        *,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.whazzup_url
        self.timeout = timeout or settings.http_timeout
        self.transport = transport

    async def get_clients(self) -> NetworkClients:
        """Return the latest snapshot; empty when the request fails."""

        payload = await fetch_json(
            self.url, timeout=self.timeout, transport=self.transport, source="Whazzup"
        )
        if payload is None:
            return NetworkClients()
        if not isinstance(payload, dict):
            logger.warning("Unexpected whazzup payload type: %s", type(payload).__name__)
            return NetworkClients()

        clients = payload.get("clients") or {}
        if not isinstance(clients, dict):
            logger.warning("Whazzup payload has no clients object")
            return NetworkClients()

        stations = _validate_entries(clients.get("atcs"), Station, "station")
        pilots = _validate_entries(clients.get("pilots"), Pilot, "pilot")
        stations.sort(key=lambda station: station.callsign)

        logger.debug("Ingested %s stations and %s pilots", len(stations), len(pilots))
        return NetworkClients(
            updated_at=_parse_timestamp(payload.get("updatedAt")),
            stations=stations,
            pilots=pilots,
        )


__all__ = ["WhazzupIngestor", "fetch_json"]
