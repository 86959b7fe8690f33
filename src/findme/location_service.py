"""Permission and position providers.

On a phone these are OS services. Here they are small objects with the same
contract, so the orchestrator does not care where a fix comes from.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Protocol

import geocoder
from rich.console import Console
from rich.prompt import Confirm
from structlog import get_logger

from findme.errors import LocationAcquisitionFailure
from findme.models import PermissionStatus, Position
from findme.settings import Settings

logger = get_logger()


class PermissionProvider(Protocol):
    async def request_foreground_permission(self) -> PermissionStatus: ...


class PositionProvider(Protocol):
    async def get_current_position(self) -> Position: ...


class StaticPermission:
    """Answers every permission request the same way."""

    def __init__(self, status: PermissionStatus):
        self.status = status

    async def request_foreground_permission(self) -> PermissionStatus:
        return self.status


class ConsolePermission:
    """Asks the user on the terminal."""

    prompt = "Allow findme to access your location?"

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    async def request_foreground_permission(self) -> PermissionStatus:
        # Confirm.ask blocks on stdin; keep the event loop free
        allowed = await asyncio.to_thread(
            Confirm.ask, self.prompt, console=self.console, default=True
        )
        return PermissionStatus.GRANTED if allowed else PermissionStatus.DENIED


class GeoIpPositionProvider:
    """Approximates a position fix from the public IP."""

    async def get_current_position(self) -> Position:
        """
        Get a one-shot position.

        Returns:
            Position at the geo-IP coordinates

        Raises:
            LocationAcquisitionFailure: If geo-IP gives no coordinates
        """
        g = await asyncio.to_thread(geocoder.ip, "me")
        if not g.ok or not g.latlng:
            raise LocationAcquisitionFailure(f"Geo-IP lookup failed: {g.status}")

        latitude, longitude = g.latlng
        logger.debug("Geo-IP position acquired", latitude=latitude, longitude=longitude)
        return Position(
            latitude=float(latitude),
            longitude=float(longitude),
            timestamp=datetime.now(tz=UTC),
        )


class StaticPositionProvider:
    """Always reports the same coordinates."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude

    async def get_current_position(self) -> Position:
        return Position(
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=datetime.now(tz=UTC),
        )


def build_permission_provider(
    settings: Settings, console: Console | None = None
) -> PermissionProvider:
    """Pick the permission provider named by settings."""
    if settings.location_permission == "granted":
        return StaticPermission(PermissionStatus.GRANTED)
    if settings.location_permission == "denied":
        return StaticPermission(PermissionStatus.DENIED)
    return ConsolePermission(console)


def build_position_provider(settings: Settings) -> PositionProvider:
    """Use the fixed coordinates from settings if both are set, else geo-IP."""
    if settings.fixed_latitude is not None and settings.fixed_longitude is not None:
        return StaticPositionProvider(settings.fixed_latitude, settings.fixed_longitude)
    return GeoIpPositionProvider()
