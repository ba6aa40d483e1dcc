"""Ingestor for the ATC coverage summary endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from activeatc.config import settings
from activeatc.ingestors.whazzup import fetch_json
from activeatc.models.coverage import CoverageRecord

logger = logging.getLogger("activeatc.ingestors.summary")


class CoverageIngestor:
    """Fetch coverage polygons for the currently active ATC positions."""

    def __init__(
        self,
        *,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.summary_url
        self.timeout = timeout or settings.http_timeout
        self.transport = transport

    async def get_coverage(self) -> list[CoverageRecord]:
        payload = await fetch_json(
            self.url, timeout=self.timeout, transport=self.transport, source="ATC summary"
        )
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning("Unexpected ATC summary payload type: %s", type(payload).__name__)
            return []

        records: list[CoverageRecord] = []
        for entry in payload:
            try:
                records.append(CoverageRecord.model_validate(entry))
            except ValidationError as exc:
                logger.debug("Skipping malformed coverage record: %s", exc)

        logger.debug("Ingested %s coverage records", len(records))
        return records


__all__ = ["CoverageIngestor"]
