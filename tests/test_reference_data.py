import json

import pytest
from sqlalchemy import create_engine, text

from activeatc.config import Settings, sqlite_readonly_url
from activeatc.models.network import Pilot
from activeatc.services.airports import AirportLookup
from activeatc.services.countries import CountryDirectory
from activeatc.services.routes import build_route, flight_summary


@pytest.fixture
def airports(tmp_path):
    db_url = f"sqlite:///{tmp_path}/airport.db3"
    engine = create_engine(db_url)
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE airports (ident TEXT PRIMARY KEY, "
                "latitude_deg REAL, longitude_deg REAL)"
            )
        )
        conn.execute(
            text("INSERT INTO airports VALUES (:ident, :lat, :lon)"),
            [
                {"ident": "EDDF", "lat": 50.0333, "lon": 8.5706},
                {"ident": "EGLL", "lat": 51.4706, "lon": -0.4619},
            ],
        )
    return AirportLookup(db_url, engine=engine)


def test_airport_lookup_hits_and_misses(airports):
    frankfurt = airports.coordinates_for("eddf")

    assert frankfurt is not None
    assert frankfurt.latitude == pytest.approx(50.0333)
    assert frankfurt.longitude == pytest.approx(8.5706)
    assert airports.coordinates_for("ZZZZ") is None
    assert airports.coordinates_for("") is None


def test_airport_lookup_without_table_is_a_miss(tmp_path):
    lookup = AirportLookup(f"sqlite:///{tmp_path}/empty.db3")

    assert lookup.coordinates_for("EDDF") is None


def test_readonly_airport_lookup_never_creates_the_file(tmp_path, airports):
    missing = tmp_path / "missing.db3"
    lookup = AirportLookup(sqlite_readonly_url(missing))
    existing = AirportLookup(sqlite_readonly_url(tmp_path / "airport.db3"))

    assert lookup.coordinates_for("EDDF") is None
    assert not missing.exists()
    assert existing.coordinates_for("EGLL").longitude == pytest.approx(-0.4619)
    assert "mode=ro" in Settings().airports_db_url


def test_build_route_resolves_both_ends(airports):
    pilot = Pilot.model_validate(
        {
            "id": 1,
            "callsign": "DLH400",
            "flightPlan": {
                "departureId": "EDDF",
                "arrivalId": "EGLL",
                "speed": "N0450",
                "level": "F350",
                "route": "DCT",
                "eet": 5400,
            },
            "lastTrack": {"latitude": 51.0, "longitude": 4.0, "altitude": 35000},
        }
    )

    route = build_route(pilot, airports)

    assert route is not None
    assert route.departure_id == "EDDF"
    assert route.arrival.latitude == pytest.approx(51.4706)
    assert route.current.longitude == 4.0
    summary = flight_summary(pilot)
    assert "From/To: EDDF -> EGLL" in summary
    assert "EET: 01:30" in summary
    assert "Altitude: 35000 ft" in summary


def test_build_route_requires_known_airports_and_track(airports):
    unknown = Pilot.model_validate(
        {
            "id": 2,
            "callsign": "XYZ1",
            "flightPlan": {"departureId": "EDDF", "arrivalId": "ZZZZ"},
            "lastTrack": {"latitude": 1.0, "longitude": 1.0},
        }
    )
    no_track = Pilot.model_validate(
        {"id": 3, "callsign": "XYZ2", "flightPlan": {"departureId": "EDDF", "arrivalId": "EGLL"}}
    )

    assert build_route(unknown, airports) is None
    assert build_route(no_track, airports) is None
    assert flight_summary(no_track) == "No flight plan or track data available for XYZ2"


def test_country_directory_lookups(tmp_path):
    path = tmp_path / "countries.json"
    path.write_text(
        json.dumps(
            [
                {"Code": "ED", "Country": "Germany", "CCode": "DE"},
                {"Code": "LT", "Country": "Turkey", "CCode": "TR"},
                {"Code": "XX", "Country": "Nowhere"},
                {"Country": "missing code"},
            ]
        )
    )

    directory = CountryDirectory.load(path)

    assert len(directory) == 3
    assert directory.country_name("EDDF_TWR") == "Germany"
    assert directory.flag_code("LTBA_TWR") == "tr"
    assert directory.flag_code("XXAA_CTR") == "default"
    assert directory.country_name("QQQQ_TWR") == "default"
    assert directory.country_name("KJFK_TWR") == "United States"
    assert directory.flag_code("KJFK_TWR") == "us"
    assert directory.country_name("YSSY_APP") == "Australia"
    assert directory.flag_code("YSSY_APP") == "au"


def test_country_directory_load_failure(tmp_path):
    with pytest.raises(RuntimeError):
        CountryDirectory.load(tmp_path / "missing.json")


def test_bundled_countries_file_loads():
    directory = CountryDirectory.load()

    assert directory.country_name("EDDF_TWR") == "Germany"
