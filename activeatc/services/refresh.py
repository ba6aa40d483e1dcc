"""Own the current traffic snapshot and refresh it on a fixed cadence."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from activeatc.config import settings
from activeatc.ingestors import CoverageIngestor, WhazzupIngestor
from activeatc.models.coverage import CoverageRecord
from activeatc.models.network import NetworkClients, Pilot, Station
from activeatc.models.traffic import TrafficCount
from activeatc.services.countries import CountryDirectory
from activeatc.services.coverage import coverage_index
from activeatc.services.traffic import compute_traffic_counts

logger = logging.getLogger("activeatc.refresh")


class RefreshTrigger(str, Enum):
    """Events that start a refresh cycle."""

    FOREGROUND = "foreground"
    TIMER = "timer"
    MANUAL = "manual"


class ClientsSource(Protocol):
    async def get_clients(self) -> NetworkClients: ...


class CoverageSource(Protocol):
    async def get_coverage(self) -> list[CoverageRecord]: ...


@dataclass(frozen=True)
class TrafficSnapshot:
    """Stations, pilots and coverage from one refresh, with derived counts."""

    stations: tuple[Station, ...] = ()
    pilots: tuple[Pilot, ...] = ()
    coverage_records: tuple[CoverageRecord, ...] = ()
    coverage: dict[str, CoverageRecord] = field(default_factory=dict)
    countries: CountryDirectory = field(default_factory=CountryDirectory)
    traffic_counts: dict[str, TrafficCount] = field(default_factory=dict)
    updated_at: Optional[datetime] = None
    refreshed_at: Optional[datetime] = None

    def find_station(self, callsign: str) -> Optional[Station]:
        return next((s for s in self.stations if s.callsign == callsign), None)

    def find_pilot(self, callsign: str) -> Optional[Pilot]:
        return next((p for p in self.pilots if p.callsign == callsign), None)

    def traffic_for(self, callsign: str) -> TrafficCount:
        return self.traffic_counts.get(callsign) or TrafficCount()


def _unwrap(result: Any, source: str) -> Any:
    if isinstance(result, Exception):
        logger.warning("%s fetch failed: %s", source, result)
        return None
    if isinstance(result, BaseException):
        raise result
    return result


class RefreshCoordinator:
    """Single writer of the traffic snapshot.

    Refresh cycles are serialised with a lock, so a snapshot always combines
    stations, pilots and coverage from the same cycle. Empty or failed
    responses keep the previous data.
    """

    def __init__(
        self,
        *,
        whazzup: ClientsSource | None = None,
        coverage: CoverageSource | None = None,
        countries_path: str | Path | None = None,
        interval: float | None = None,
    ) -> None:
        self.whazzup = whazzup or WhazzupIngestor()
        self.coverage_source = coverage or CoverageIngestor()
        self.countries_path = countries_path
        self.interval = interval or settings.refresh_interval_seconds
        self.snapshot = TrafficSnapshot()
        self._lock = asyncio.Lock()
        self._timer_task: asyncio.Task | None = None

    @property
    def timer_task(self) -> asyncio.Task | None:
        return self._timer_task

    async def refresh(self, trigger: RefreshTrigger = RefreshTrigger.MANUAL) -> TrafficSnapshot:
        """Run one refresh cycle and return the resulting snapshot."""

        async with self._lock:
            logger.debug("Refresh started (trigger=%s)", trigger.value)
            clients_result, coverage_result = await asyncio.gather(
                self.whazzup.get_clients(),
                self.coverage_source.get_coverage(),
                return_exceptions=True,
            )
            clients: NetworkClients | None = _unwrap(clients_result, "Station/pilot")
            records: list[CoverageRecord] | None = _unwrap(coverage_result, "Coverage")

            current = self.snapshot
            countries = current.countries
            if not countries:
                countries = await asyncio.to_thread(self._load_countries, countries)

            stations, pilots, updated_at = current.stations, current.pilots, current.updated_at
            coverage_records, coverage = current.coverage_records, current.coverage
            recompute = False

            if clients is not None and clients.stations:
                stations = tuple(clients.stations)
                updated_at = clients.updated_at
                recompute = True
            else:
                logger.warning("Received empty station data; keeping existing stations")

            if clients is not None and clients.pilots:
                pilots = tuple(clients.pilots)
                updated_at = clients.updated_at
                recompute = True
            else:
                logger.warning("Received empty pilot data; keeping existing pilots")

            if records:
                coverage_records = tuple(records)
                coverage = coverage_index(coverage_records)
                recompute = True
            else:
                logger.warning("Received empty coverage data; keeping existing data")

            traffic_counts = current.traffic_counts
            if recompute:
                traffic_counts = compute_traffic_counts(stations, pilots, coverage)

            self.snapshot = TrafficSnapshot(
                stations=stations,
                pilots=pilots,
                coverage_records=coverage_records,
                coverage=coverage,
                countries=countries,
                traffic_counts=traffic_counts,
                updated_at=updated_at,
                refreshed_at=datetime.now(tz=timezone.utc),
            )
            logger.info(
                "Refresh complete (trigger=%s): %s stations, %s pilots, %s coverage records",
                trigger.value,
                len(stations),
                len(pilots),
                len(coverage_records),
            )
            return self.snapshot

    def _load_countries(self, previous: CountryDirectory) -> CountryDirectory:
        # runs in a worker thread; the directory is read until it loads once
        try:
            return CountryDirectory.load(self.countries_path)
        except RuntimeError as exc:
            logger.warning("Keeping previous country metadata: %s", exc)
            return previous

    async def trigger(self, trigger: RefreshTrigger) -> TrafficSnapshot:
        """Refresh now; non-timer triggers also restart the periodic timer."""

        snapshot = await self.refresh(trigger)
        if trigger is not RefreshTrigger.TIMER:
            self.start_timer()
        return snapshot

    def start_timer(self) -> asyncio.Task:
        """Start the periodic refresh, cancelling any timer already running."""

        if self._timer_task is not None and not self._timer_task.done():
            self._timer_task.cancel()
        self._timer_task = asyncio.create_task(self._run_timer())
        return self._timer_task

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.refresh(RefreshTrigger.TIMER)
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # pragma: no cover - defensive logging
                logger.error("Periodic refresh failed: %s", exc)

    async def start(self) -> TrafficSnapshot:
        return await self.trigger(RefreshTrigger.FOREGROUND)

    async def stop(self) -> None:
        task = self._timer_task
        self._timer_task = None
        if task:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            logger.info("Refresh timer stopped")


__all__ = [
    "RefreshCoordinator",
    "RefreshTrigger",
    "TrafficSnapshot",
]
