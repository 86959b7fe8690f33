"""Permission and position providers."""

from types import SimpleNamespace

import pytest

from findme import location_service
from findme.errors import LocationAcquisitionFailure
from findme.location_service import (
    ConsolePermission,
    GeoIpPositionProvider,
    StaticPermission,
    StaticPositionProvider,
    build_permission_provider,
    build_position_provider,
)
from findme.models import PermissionStatus
from findme.settings import Settings


@pytest.mark.asyncio
async def test_geoip_position(monkeypatch):
    monkeypatch.setattr(
        location_service.geocoder,
        "ip",
        lambda location: SimpleNamespace(ok=True, latlng=[35.6892, 51.389], status="OK"),
    )

    position = await GeoIpPositionProvider().get_current_position()

    assert position.latitude == 35.6892
    assert position.longitude == 51.389
    assert position.timestamp is not None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "result",
    [
        SimpleNamespace(ok=False, latlng=[], status="ERROR - No results found"),
        SimpleNamespace(ok=True, latlng=None, status="OK"),
    ],
)
async def test_geoip_failure_raises(monkeypatch, result):
    monkeypatch.setattr(location_service.geocoder, "ip", lambda location: result)

    with pytest.raises(LocationAcquisitionFailure):
        await GeoIpPositionProvider().get_current_position()


@pytest.mark.asyncio
async def test_static_position():
    position = await StaticPositionProvider(32.0, 53.0).get_current_position()

    assert (position.latitude, position.longitude) == (32.0, 53.0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("answer", "status"),
    [(True, PermissionStatus.GRANTED), (False, PermissionStatus.DENIED)],
)
async def test_console_permission(monkeypatch, answer, status):
    monkeypatch.setattr(location_service.Confirm, "ask", lambda *args, **kwargs: answer)

    assert await ConsolePermission().request_foreground_permission() == status


@pytest.mark.parametrize(
    ("mode", "expected"),
    [("granted", PermissionStatus.GRANTED), ("denied", PermissionStatus.DENIED)],
)
def test_build_static_permission(mode, expected):
    provider = build_permission_provider(
        Settings(_env_file=None, location_permission=mode)
    )

    assert isinstance(provider, StaticPermission)
    assert provider.status == expected


def test_build_prompting_permission():
    provider = build_permission_provider(Settings(_env_file=None, location_permission="prompt"))

    assert isinstance(provider, ConsolePermission)


def test_build_position_provider():
    fixed = build_position_provider(
        Settings(_env_file=None, fixed_latitude=1.0, fixed_longitude=2.0)
    )
    half_fixed = build_position_provider(Settings(_env_file=None, fixed_latitude=1.0))

    assert isinstance(fixed, StaticPositionProvider)
    assert isinstance(half_fixed, GeoIpPositionProvider)
