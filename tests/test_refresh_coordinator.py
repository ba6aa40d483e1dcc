import asyncio
import json
import threading

import pytest

from activeatc.models.coverage import CoverageRecord
from activeatc.models.network import NetworkClients, Pilot, Station
from activeatc.models.traffic import TrafficCount
from activeatc.services.countries import CountryDirectory
from activeatc.services.refresh import RefreshCoordinator, RefreshTrigger


def _station(callsign: str, position: str) -> Station:
    return Station.model_validate(
        {
            "id": 1,
            "callsign": callsign,
            "atcSession": {"frequency": 118.0, "position": position},
            "lastTrack": {"latitude": 50.5, "longitude": 8.5},
        }
    )


def _pilot(callsign: str, departure: str, arrival: str) -> Pilot:
    return Pilot.model_validate(
        {
            "id": 2,
            "callsign": callsign,
            "flightPlan": {"departureId": departure, "arrivalId": arrival},
            "lastTrack": {"latitude": 50.5, "longitude": 8.5},
        }
    )


def _record(callsign: str) -> CoverageRecord:
    return CoverageRecord.model_validate(
        {
            "callsign": callsign,
            "atcSession": {"position": "CTR"},
            "subcenter": {
                "regionMap": [
                    {"lat": 50, "lng": 8},
                    {"lat": 50, "lng": 9},
                    {"lat": 51, "lng": 9},
                    {"lat": 51, "lng": 8},
                ]
            },
        }
    )


class FakeWhazzupIngestor:
    def __init__(self, responses: list[NetworkClients]):
        self.responses = list(responses)
        self.call_count = 0

    async def get_clients(self) -> NetworkClients:
        self.call_count += 1
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class FakeCoverageIngestor:
    def __init__(self, responses: list[list[CoverageRecord]], fail: bool = False):
        self.responses = list(responses)
        self.fail = fail
        self.call_count = 0

    async def get_coverage(self) -> list[CoverageRecord]:
        self.call_count += 1
        if self.fail:
            raise RuntimeError("coverage fail")
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def countries_file(tmp_path):
    path = tmp_path / "countries.json"
    path.write_text(json.dumps([{"Code": "ED", "Country": "Germany", "CCode": "DE"}]))
    return path


FULL = NetworkClients(
    stations=[_station("EDDF_TWR", "TWR"), _station("EDGG_CTR", "CTR")],
    pilots=[_pilot("DLH1", "EDDF", "EGLL"), _pilot("BAW2", "EGLL", "EDDF")],
)


@pytest.mark.anyio
async def test_refresh_builds_snapshot_and_counts(countries_file):
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=3600,
    )

    snapshot = await coordinator.refresh(RefreshTrigger.MANUAL)

    assert coordinator.snapshot is snapshot
    assert len(snapshot.stations) == 2
    assert snapshot.traffic_counts["EDDF_TWR"] == TrafficCount(inbound=1, outbound=1)
    assert snapshot.traffic_counts["EDGG_CTR"] == TrafficCount(in_region=2)
    assert snapshot.countries.country_name("EDDF_TWR") == "Germany"
    assert snapshot.refreshed_at is not None


@pytest.mark.anyio
async def test_empty_response_keeps_previous_snapshot(countries_file):
    emptied = NetworkClients(stations=[], pilots=[])
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL, emptied]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")], []]),
        countries_path=countries_file,
        interval=3600,
    )

    first = await coordinator.refresh()
    second = await coordinator.refresh()

    assert second.stations == first.stations
    assert second.pilots == first.pilots
    assert len(second.pilots) == 2
    assert second.coverage_records == first.coverage_records
    assert second.traffic_counts == first.traffic_counts


@pytest.mark.anyio
async def test_new_stations_are_picked_up_without_pilots(countries_file):
    first_cycle = NetworkClients(
        stations=[_station("EDDF_TWR", "TWR")], pilots=[_pilot("DLH1", "EDDF", "EGLL")]
    )
    second_cycle = NetworkClients(
        stations=[_station("EDDF_TWR", "TWR"), _station("EDGG_CTR", "CTR")], pilots=[]
    )
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([first_cycle, second_cycle]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=3600,
    )

    await coordinator.refresh()
    snapshot = await coordinator.refresh()

    assert [s.callsign for s in snapshot.stations] == ["EDDF_TWR", "EDGG_CTR"]
    assert [p.callsign for p in snapshot.pilots] == ["DLH1"]
    # counts cover the new station, using the retained pilot
    assert snapshot.traffic_counts["EDGG_CTR"] == TrafficCount(in_region=1)
    assert snapshot.traffic_counts["EDDF_TWR"] == TrafficCount(outbound=1)


@pytest.mark.anyio
async def test_coverage_failure_does_not_block_station_update(countries_file):
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL]),
        coverage=FakeCoverageIngestor([[]], fail=True),
        countries_path=countries_file,
        interval=3600,
    )

    snapshot = await coordinator.refresh()

    assert len(snapshot.stations) == 2
    assert snapshot.coverage_records == ()
    # no polygon for the center yet, so it reports zero
    assert snapshot.traffic_counts["EDGG_CTR"] == TrafficCount()
    assert snapshot.traffic_counts["EDDF_TWR"] == TrafficCount(inbound=1, outbound=1)


@pytest.mark.anyio
async def test_missing_countries_file_keeps_previous_directory(tmp_path, countries_file):
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=3600,
    )
    await coordinator.refresh()

    coordinator.countries_path = tmp_path / "missing.json"
    snapshot = await coordinator.refresh()

    assert snapshot.countries.country_name("EDGG_CTR") == "Germany"


@pytest.mark.anyio
async def test_trigger_restarts_single_timer(countries_file):
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=3600,
    )

    await coordinator.trigger(RefreshTrigger.FOREGROUND)
    first_timer = coordinator.timer_task
    await coordinator.trigger(RefreshTrigger.MANUAL)
    second_timer = coordinator.timer_task
    await asyncio.sleep(0)

    assert first_timer is not second_timer
    assert first_timer.cancelled()
    assert not second_timer.done()

    await coordinator.stop()
    assert coordinator.timer_task is None
    assert second_timer.cancelled()


@pytest.mark.anyio
async def test_timer_refreshes_periodically(countries_file):
    whazzup = FakeWhazzupIngestor([FULL])
    coordinator = RefreshCoordinator(
        whazzup=whazzup,
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=0.01,
    )

    await coordinator.start()
    await asyncio.sleep(0.1)
    await coordinator.stop()

    assert whazzup.call_count >= 3


@pytest.mark.anyio
async def test_concurrent_refreshes_are_serialized(countries_file):
    in_flight = 0
    max_in_flight = 0

    class SlowWhazzup:
        async def get_clients(self):
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return FULL

    coordinator = RefreshCoordinator(
        whazzup=SlowWhazzup(),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=countries_file,
        interval=3600,
    )

    await asyncio.gather(
        coordinator.refresh(RefreshTrigger.TIMER),
        coordinator.refresh(RefreshTrigger.FOREGROUND),
        coordinator.refresh(RefreshTrigger.MANUAL),
    )

    assert max_in_flight == 1


@pytest.mark.anyio
async def test_countries_load_off_the_event_loop_until_available(tmp_path, monkeypatch):
    path = tmp_path / "countries.json"
    loader_threads = []
    original_load = CountryDirectory.load

    def recording_load(source=None):
        loader_threads.append(threading.get_ident())
        return original_load(source)

    monkeypatch.setattr(CountryDirectory, "load", staticmethod(recording_load))
    coordinator = RefreshCoordinator(
        whazzup=FakeWhazzupIngestor([FULL]),
        coverage=FakeCoverageIngestor([[_record("EDGG_CTR")]]),
        countries_path=path,
        interval=3600,
    )

    missing = await coordinator.refresh()
    path.write_text(json.dumps([{"Code": "ED", "Country": "Germany", "CCode": "DE"}]))
    loaded = await coordinator.refresh()
    path.write_text(json.dumps([{"Code": "ED", "Country": "Changed", "CCode": "DE"}]))
    cached = await coordinator.refresh()

    assert missing.countries.country_name("EDDF_TWR") == "default"
    assert loaded.countries.country_name("EDDF_TWR") == "Germany"
    assert cached.countries is loaded.countries
    assert len(loader_threads) == 2
    assert threading.get_ident() not in loader_threads
