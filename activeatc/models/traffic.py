"""Per-station traffic counts derived from a snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TrafficCount(BaseModel):
    """Inbound/outbound or in-region aircraft counts for one station."""

    inbound: int = Field(default=0, ge=0, description="Flights arriving at the station's airport")
    outbound: int = Field(default=0, ge=0, description="Flights departing the station's airport")
    in_region: int = Field(
        default=0, ge=0, description="Aircraft inside the station's area of control"
    )

    model_config = ConfigDict(frozen=True)


__all__ = ["TrafficCount"]
