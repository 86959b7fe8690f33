"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

import pytest

# Add src to path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from findme.alerts import AlertLog  # noqa: E402
from findme.models import DeviceDescriptor, PermissionStatus, Position  # noqa: E402
from findme.orchestrator import LocationOrchestrator, initial_state  # noqa: E402
from findme.settings import Settings  # noqa: E402
from findme.store import UiStateStore  # noqa: E402

TEST_DEVICE = DeviceDescriptor(
    brand="Acme",
    manufacturer="Acme Corp",
    model_name="Pocket 3",
    os_name="Linux",
    os_version="6.1",
    device_name="pocket",
    total_memory=8 * 1024 * 1024 * 1024,
)


class FakeDeviceInfo:
    def __init__(self, descriptor=TEST_DEVICE):
        self.descriptor = descriptor
        self.calls = 0

    def read(self):
        self.calls += 1
        return self.descriptor


class FakeIpClient:
    def __init__(self, ip="203.0.113.7", error=None):
        self.ip = ip
        self.error = error
        self.calls = 0

    async def fetch_public_ip(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.ip


class FakePermissions:
    def __init__(self, status=PermissionStatus.GRANTED, error=None, on_request=None):
        self.status = status
        self.error = error
        self.on_request = on_request
        self.calls = 0

    async def request_foreground_permission(self):
        self.calls += 1
        if self.on_request:
            await self.on_request()
        if self.error:
            raise self.error
        return self.status


class FakePositions:
    def __init__(self, position=None, error=None, on_request=None):
        self.position = position or Position(latitude=32.0, longitude=53.0)
        self.error = error
        self.on_request = on_request
        self.calls = 0

    async def get_current_position(self):
        self.calls += 1
        if self.on_request:
            self.on_request()
        if self.error:
            raise self.error
        return self.position


class FakeGeocoder:
    def __init__(self, body=None, error=None, on_request=None):
        self.body = body
        self.error = error
        self.on_request = on_request
        self.requests = []

    async def reverse_geocode(self, latitude, longitude):
        self.requests.append((latitude, longitude))
        if self.on_request:
            self.on_request()
        if self.error:
            raise self.error
        return self.body


@pytest.fixture
def settings():
    """Settings that never touch the environment or a .env file."""
    return Settings(_env_file=None, location_permission="granted")


@pytest.fixture
def alerts():
    return AlertLog()


@pytest.fixture
def make_orchestrator(settings, alerts):
    """Build an orchestrator around fakes; pass overrides by keyword."""

    def factory(**overrides):
        parts = {
            "store": UiStateStore(initial_state(settings)),
            "device_info": FakeDeviceInfo(),
            "ip_client": FakeIpClient(),
            "permissions": FakePermissions(),
            "positions": FakePositions(),
            "geocoder": FakeGeocoder(body={"countryName": "Iran", "city": "Tehran"}),
            "alerts": alerts,
            "locate_delta": settings.locate_delta,
        }
        parts.update(overrides)
        return LocationOrchestrator(**parts)

    return factory
