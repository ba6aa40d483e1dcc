"""Models for station and pilot records published by the tracker snapshot."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from activeatc.domain import StationCategory


class LatLng(BaseModel):
    """Geographic coordinate in decimal degrees."""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    model_config = ConfigDict(frozen=True)


class LastTrack(BaseModel):
    """Most recent position report for a connected client."""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    altitude: Optional[int] = Field(default=None, description="Altitude in feet")
    altitude_difference: Optional[int] = Field(default=None, alias="altitudeDifference")
    heading: Optional[int] = Field(default=None, description="Heading in degrees")
    on_ground: Optional[bool] = Field(default=None, alias="onGround")
    state: Optional[str] = Field(default=None, description="Flight phase reported by the client")
    timestamp: Optional[str] = Field(default=None, description="Report timestamp")
    transponder: Optional[int] = Field(default=None)
    transponder_mode: Optional[str] = Field(default=None, alias="transponderMode")
    time: int = Field(default=0, description="Seconds elapsed since the session started")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def position(self) -> LatLng:
        return LatLng(latitude=self.latitude, longitude=self.longitude)


class AtcSession(BaseModel):
    """Frequency and position type of a live ATC session."""

    frequency: Optional[float] = Field(default=None, description="Frequency in MHz")
    position: StationCategory = Field(
        default=StationCategory.UNKNOWN, description="Operational position category"
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> StationCategory:
        if value is None:
            return StationCategory.UNKNOWN
        return StationCategory(value)


class Atis(BaseModel):
    """Textual information bulletin broadcast by a station."""

    lines: Optional[list[str]] = Field(default=None)
    revision: Optional[str] = Field(default=None)
    timestamp: Optional[str] = Field(default=None)

    model_config = ConfigDict(extra="ignore")


class Station(BaseModel):
    """An active ATC controller position."""

    id: int = Field(..., description="Session identifier")
    user_id: Optional[int] = Field(default=None, alias="userId")
    callsign: str = Field(..., description="Station callsign, e.g. LTBA_TWR")
    server_id: Optional[str] = Field(default=None, alias="serverId")
    rating: Optional[int] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    time: int = Field(default=0, description="Seconds connected")
    atc_session: AtcSession = Field(default_factory=AtcSession, alias="atcSession")
    last_track: LastTrack = Field(..., alias="lastTrack")
    atis: Optional[Atis] = Field(default=None)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def category(self) -> StationCategory:
        return self.atc_session.position

    @property
    def latitude(self) -> float:
        return self.last_track.latitude

    @property
    def longitude(self) -> float:
        return self.last_track.longitude

    @property
    def position(self) -> LatLng:
        return self.last_track.position


class FlightPlan(BaseModel):
    """Filed flight plan for a pilot."""

    departure_id: Optional[str] = Field(default=None, alias="departureId")
    arrival_id: Optional[str] = Field(default=None, alias="arrivalId")
    alternative_id: Optional[str] = Field(default=None, alias="alternativeId")
    alternative2_id: Optional[str] = Field(default=None, alias="alternative2Id")
    route: Optional[str] = Field(default=None)
    remarks: Optional[str] = Field(default=None)
    speed: Optional[str] = Field(default=None, description="Cruise speed, e.g. N0450")
    level: Optional[str] = Field(default=None, description="Cruise level, e.g. F350")
    eet: Optional[int] = Field(default=None, description="Estimated en-route seconds")
    endurance: Optional[int] = Field(default=None)
    departure_time: Optional[int] = Field(default=None, alias="departureTime")
    people_on_board: Optional[int] = Field(default=None, alias="peopleOnBoard")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Pilot(BaseModel):
    """A tracked flight with an optional plan and position."""

    id: int = Field(..., description="Session identifier")
    user_id: Optional[int] = Field(default=None, alias="userId")
    callsign: str = Field(..., description="Flight callsign")
    rating: Optional[int] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    time: int = Field(default=0, description="Seconds connected")
    flight_plan: Optional[FlightPlan] = Field(default=None, alias="flightPlan")
    last_track: Optional[LastTrack] = Field(default=None, alias="lastTrack")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NetworkClients(BaseModel):
    """Stations and pilots from one tracker snapshot."""

    updated_at: Optional[datetime] = Field(default=None)
    stations: list[Station] = Field(default_factory=list)
    pilots: list[Pilot] = Field(default_factory=list)


__all__ = [
    "AtcSession",
    "Atis",
    "FlightPlan",
    "LastTrack",
    "LatLng",
    "NetworkClients",
    "Pilot",
    "Station",
]
