"""Location orchestrator: startup fetch and the Find Me workflow."""

from __future__ import annotations

import asyncio
from typing import Any

from rich.console import Console
from structlog import get_logger

from findme.alerts import AlertSink, ConsoleAlerts
from findme.device_service import DeviceInfoProvider, PlatformDeviceInfo
from findme.errors import (
    AddressResolutionFailure,
    IpLookupFailure,
    LocationAcquisitionFailure,
    PermissionDenied,
)
from findme.geocoding_client import (
    ReverseGeocodingClient,
    body_is_present,
    parse_reverse_geocode,
)
from findme.ip_client import IpLookupClient
from findme.location_service import (
    PermissionProvider,
    PositionProvider,
    build_permission_provider,
    build_position_provider,
)
from findme.models import (
    DeviceDescriptor,
    LocateOutcome,
    LocateStage,
    MapViewport,
    PermissionStatus,
    Position,
    UiState,
)
from findme.settings import Settings, get_settings
from findme.store import UiStateStore

logger = get_logger()

LOCATE_DELTA = 0.005


def initial_state(settings: Settings) -> UiState:
    """State before anything has been fetched."""
    return UiState(
        region=MapViewport(
            latitude=settings.default_latitude,
            longitude=settings.default_longitude,
            latitude_delta=settings.default_delta,
            longitude_delta=settings.default_delta,
        )
    )


class LocationOrchestrator:
    """Sequences the platform and network calls and writes the results to the store.

    The orchestrator is the only writer of the store. Every write goes
    through one of the transition methods below, and every failure is turned
    into exactly one alert. Nothing is raised to the caller.
    """

    def __init__(
        self,
        store: UiStateStore,
        device_info: DeviceInfoProvider,
        ip_client: IpLookupClient,
        permissions: PermissionProvider,
        positions: PositionProvider,
        geocoder: ReverseGeocodingClient,
        alerts: AlertSink,
        locate_delta: float = LOCATE_DELTA,
    ):
        self.store = store
        self.device_info = device_info
        self.ip_client = ip_client
        self.permissions = permissions
        self.positions = positions
        self.geocoder = geocoder
        self.alerts = alerts
        self.locate_delta = locate_delta

    # Startup

    def load_device_descriptor(self) -> DeviceDescriptor:
        """Read the device descriptor and publish it."""
        descriptor = self.device_info.read()
        self.store.update(device=descriptor)
        return descriptor

    async def fetch_public_ip(self) -> str | None:
        """
        Resolve the public IP and publish it.

        Returns:
            The IP, or None if the lookup failed (an alert has been shown)
        """
        try:
            ip = await self.ip_client.fetch_public_ip()
        except Exception as e:
            logger.error("Public IP lookup failed", error=str(e))
            self.alerts.alert(IpLookupFailure.message)
            return None

        self.store.update(public_ip=ip)
        logger.info("Public IP resolved", ip=ip)
        return ip

    async def startup(self) -> None:
        """Run both startup fetches. Neither depends on the other."""
        ip_task = asyncio.create_task(self.fetch_public_ip())
        try:
            self.load_device_descriptor()
        finally:
            await ip_task

    # Find Me

    async def find_me(self) -> LocateOutcome:
        """
        Locate the device and resolve its country and city.

        Returns:
            How the activation ended
        """
        if self.store.state.locating:
            logger.info("Find Me ignored, a locate is already running")
            return LocateOutcome.REJECTED_BUSY

        self._begin_locate()
        try:
            return await self._locate()
        finally:
            self._finish_locate()

    async def _locate(self) -> LocateOutcome:
        try:
            await self._require_permission()
            await self._locate_and_resolve()
        except PermissionDenied as e:
            logger.warning("Location permission not granted", detail=str(e))
            self.alerts.alert(e.message)
            return LocateOutcome.PERMISSION_DENIED
        except AddressResolutionFailure as e:
            logger.warning("Reverse geocoder returned no body", detail=str(e))
            self.alerts.alert(e.message)
            return LocateOutcome.ADDRESS_MISSING
        except LocationAcquisitionFailure as e:
            cause = e.__cause__ or e
            logger.error(
                "Locate failed",
                stage=str(self.store.state.stage),
                error=str(cause),
                error_type=type(cause).__name__,
            )
            self.alerts.alert(e.message)
            return LocateOutcome.LOCATION_FAILED

        return LocateOutcome.LOCATED

    async def _require_permission(self) -> None:
        """
        Raises:
            PermissionDenied: Unless the provider answers granted
        """
        try:
            status = await self.permissions.request_foreground_permission()
        except Exception as e:
            raise PermissionDenied(f"Permission request failed: {e}") from e
        if status != PermissionStatus.GRANTED:
            raise PermissionDenied(f"Permission status is {status}")

    async def _locate_and_resolve(self) -> None:
        """
        Acquire a fix, publish it, then resolve and publish its place names.

        Raises:
            AddressResolutionFailure: If the geocoder answers with no body
            LocationAcquisitionFailure: For any other failure in either step
        """
        # One handler spans the fix and the address lookup
        try:
            self._enter(LocateStage.ACQUIRING_POSITION)
            position = await self.positions.get_current_position()
            self._apply_position(position)

            self._enter(LocateStage.RESOLVING_ADDRESS)
            body = await self.geocoder.reverse_geocode(
                position.latitude, position.longitude
            )
            if not body_is_present(body):
                raise AddressResolutionFailure(f"Reverse geocoder answered {body!r}")
            self._apply_address(body)
        except (AddressResolutionFailure, LocationAcquisitionFailure):
            raise
        except Exception as e:
            raise LocationAcquisitionFailure(str(e)) from e

    # Transitions

    def _begin_locate(self) -> None:
        self.store.update(locating=True, stage=LocateStage.REQUESTING_PERMISSION)

    def _enter(self, stage: LocateStage) -> None:
        self.store.update(stage=stage)

    def _apply_position(self, position: Position) -> None:
        self.store.update(
            position=position,
            region=MapViewport.centered_on(position, self.locate_delta),
        )
        logger.info(
            "Position acquired",
            latitude=position.latitude,
            longitude=position.longitude,
        )

    def _apply_address(self, body: Any) -> None:
        # Fields the service leaves out keep their previous values
        if not isinstance(body, dict):
            return
        result = parse_reverse_geocode(body)
        changes = {}
        if result.country_name:
            changes["country"] = result.country_name
        if result.city:
            changes["city"] = result.city
        if changes:
            self.store.update(**changes)
        logger.info("Address resolved", country=result.country_name, city=result.city)

    def _finish_locate(self) -> None:
        self.store.update(locating=False, stage=LocateStage.IDLE)


def build_orchestrator(
    settings: Settings | None = None,
    alerts: AlertSink | None = None,
    console: Console | None = None,
) -> LocationOrchestrator:
    """Wire an orchestrator from settings with the default providers."""
    settings = settings or get_settings()
    return LocationOrchestrator(
        store=UiStateStore(initial_state(settings)),
        device_info=PlatformDeviceInfo(),
        ip_client=IpLookupClient(str(settings.ip_lookup_url), settings.http_timeout),
        permissions=build_permission_provider(settings, console),
        positions=build_position_provider(settings),
        geocoder=ReverseGeocodingClient(
            str(settings.reverse_geocode_url),
            settings.locality_language,
            settings.http_timeout,
        ),
        alerts=alerts or ConsoleAlerts(console),
        locate_delta=settings.locate_delta,
    )
