"""Device descriptor provider."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Protocol

import psutil
from structlog import get_logger

from findme.models import DeviceDescriptor

logger = get_logger()

DMI_DIR = Path("/sys/class/dmi/id")


class DeviceInfoProvider(Protocol):
    """Read-only accessors for the host device."""

    def read(self) -> DeviceDescriptor: ...


def _read_dmi(name: str, dmi_dir: Path = DMI_DIR) -> str | None:
    try:
        # Firmware strings are not always valid UTF-8
        value = (dmi_dir / name).read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None
    return value or None


def _total_memory() -> int | None:
    try:
        return int(psutil.virtual_memory().total)
    except (OSError, RuntimeError):
        return None


class PlatformDeviceInfo:
    """Describes the machine this process runs on.

    Fields the host does not expose come back as None. A missing field is
    never an error.
    """

    def __init__(self, dmi_dir: Path = DMI_DIR):
        self.dmi_dir = dmi_dir

    def read(self) -> DeviceDescriptor:
        vendor = _read_dmi("sys_vendor", self.dmi_dir)
        descriptor = DeviceDescriptor(
            brand=_read_dmi("board_vendor", self.dmi_dir) or vendor,
            manufacturer=vendor,
            model_name=_read_dmi("product_name", self.dmi_dir) or platform.machine() or None,
            os_name=platform.system() or None,
            os_version=platform.release() or None,
            device_name=platform.node() or None,
            total_memory=_total_memory(),
        )
        logger.debug("Read device descriptor", device=descriptor.model_dump())
        return descriptor
