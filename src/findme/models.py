"""State and value models for findme."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class LocateStage(StrEnum):
    """Where the Find Me workflow currently is."""

    IDLE = "idle"
    REQUESTING_PERMISSION = "requesting_permission"
    ACQUIRING_POSITION = "acquiring_position"
    RESOLVING_ADDRESS = "resolving_address"


class PermissionStatus(StrEnum):
    """Answer to a foreground location permission request."""

    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class LocateOutcome(StrEnum):
    """How a single Find Me activation ended."""

    LOCATED = "located"
    PERMISSION_DENIED = "permission_denied"
    LOCATION_FAILED = "location_failed"
    ADDRESS_MISSING = "address_missing"
    REJECTED_BUSY = "rejected_busy"


class DeviceDescriptor(BaseModel):
    """Descriptive facts about the host device, read once at startup."""

    model_config = ConfigDict(frozen=True)

    brand: str | None = None
    manufacturer: str | None = None
    model_name: str | None = None
    os_name: str | None = None
    os_version: str | None = None
    device_name: str | None = None
    total_memory: int | None = Field(None, description="Total memory in bytes")

    @property
    def total_memory_mb(self) -> str | None:
        """Total memory for display, e.g. '8192.0 MB'."""
        if self.total_memory is None:
            return None
        return f"{self.total_memory / (1024 * 1024)} MB"


class Position(BaseModel):
    """A one-shot position fix."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    accuracy: float | None = Field(None, description="Horizontal accuracy in metres")
    altitude: float | None = None
    timestamp: datetime | None = None


class MapViewport(BaseModel):
    """Visible map area: a centre plus a span in each axis."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    @classmethod
    def centered_on(cls, position: Position, delta: float) -> MapViewport:
        return cls(
            latitude=position.latitude,
            longitude=position.longitude,
            latitude_delta=delta,
            longitude_delta=delta,
        )


class ReverseGeocodeResult(BaseModel):
    """Place names for a coordinate. Empty when the service omits them."""

    model_config = ConfigDict(frozen=True)

    country_name: str = ""
    city: str = ""


class Marker(BaseModel):
    """A titled pin on the map."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    title: str


class UiState(BaseModel):
    """Everything the screen shows.

    Written only by the orchestrator; the view reads snapshots.
    """

    model_config = ConfigDict(frozen=True)

    device: DeviceDescriptor = Field(default_factory=DeviceDescriptor)
    position: Position | None = None
    region: MapViewport
    country: str = ""
    city: str = ""
    public_ip: str = ""
    locating: bool = False
    stage: LocateStage = LocateStage.IDLE
