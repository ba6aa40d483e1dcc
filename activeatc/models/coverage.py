"""Models for the ATC coverage summary endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from activeatc.models.network import AtcSession


class RegionPoint(BaseModel):
    """Single vertex of a coverage polygon."""

    lat: float
    lng: float

    model_config = ConfigDict(extra="ignore")


class CoverageAirport(BaseModel):
    """Airport the coverage position belongs to."""

    icao: str
    iata: Optional[str] = None
    name: Optional[str] = None
    country_id: Optional[str] = Field(default=None, alias="countryId")
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    military: bool = False

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AtcPosition(BaseModel):
    """Airport-bound position definition with its own coverage polygon."""

    airport_id: Optional[str] = Field(default=None, alias="airportId")
    atc_callsign: Optional[str] = Field(default=None, alias="atcCallsign")
    military: bool = False
    middle_identifier: Optional[str] = Field(default=None, alias="middleIdentifier")
    position: Optional[str] = None
    compose_position: Optional[str] = Field(default=None, alias="composePosition")
    region_map: list[RegionPoint] = Field(default_factory=list, alias="regionMap")
    airport: Optional[CoverageAirport] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Subcenter(BaseModel):
    """Area-control sector definition with its own coverage polygon."""

    center_id: Optional[str] = Field(default=None, alias="centerId")
    atc_callsign: Optional[str] = Field(default=None, alias="atcCallsign")
    middle_identifier: Optional[str] = Field(default=None, alias="middleIdentifier")
    compose_position: Optional[str] = Field(default=None, alias="composePosition")
    military: bool = False
    frequency: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    region_map: list[RegionPoint] = Field(default_factory=list, alias="regionMap")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CoverageRecord(BaseModel):
    """Per-station coverage descriptor keyed by callsign."""

    id: Optional[int] = None
    user_id: Optional[int] = Field(default=None, alias="userId")
    callsign: str = Field(..., description="Callsign matching a live station")
    connection_type: Optional[str] = Field(default=None, alias="connectionType")
    atc_session: AtcSession = Field(default_factory=AtcSession, alias="atcSession")
    atc_position: Optional[AtcPosition] = Field(default=None, alias="atcPosition")
    subcenter: Optional[Subcenter] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


__all__ = [
    "AtcPosition",
    "CoverageAirport",
    "CoverageRecord",
    "RegionPoint",
    "Subcenter",
]
