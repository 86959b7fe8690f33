"""Presentation layer: what the screen shows for a given state."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from findme.models import DeviceDescriptor, MapViewport, Marker, UiState
from findme.templates import format_degrees, render_output

YOU_ARE_HERE = "You are here"
MAX_ZOOM = 19


class MapView(BaseModel):
    """Input for the map widget: a region and its markers."""

    model_config = ConfigDict(frozen=True)

    region: MapViewport
    markers: tuple[Marker, ...] = ()

    @property
    def zoom(self) -> int:
        """Slippy-map zoom level whose width roughly matches the span."""
        delta = max(self.region.latitude_delta, self.region.longitude_delta)
        if delta <= 0:
            return MAX_ZOOM
        return max(0, min(MAX_ZOOM, round(math.log2(360 / delta))))

    @property
    def osm_url(self) -> str:
        lat = format_degrees(self.region.latitude)
        lon = format_degrees(self.region.longitude)
        pin = ""
        if self.markers:
            marker = self.markers[0]
            pin = f"?mlat={format_degrees(marker.latitude)}&mlon={format_degrees(marker.longitude)}"
        return f"https://www.openstreetmap.org/{pin}#map={self.zoom}/{lat}/{lon}"


def map_view(state: UiState) -> MapView:
    """The region plus a single marker at the position, if there is one."""
    markers: tuple[Marker, ...] = ()
    if state.position is not None:
        markers = (
            Marker(
                latitude=state.position.latitude,
                longitude=state.position.longitude,
                title=YOU_ARE_HERE,
            ),
        )
    return MapView(region=state.region, markers=markers)


def panel_rows(state: UiState) -> list[tuple[str, str]]:
    """Label/value rows under the device name.

    The whole block is hidden until a position exists, so country and city
    never show without coordinates.
    """
    if state.position is None:
        return []
    return [
        ("Latitude", format_degrees(state.position.latitude)),
        ("Longitude", format_degrees(state.position.longitude)),
        ("Country", state.country),
        ("City", state.city),
        ("IP Address", state.public_ip),
    ]


def render_panel(state: UiState, label: str) -> str:
    return render_output(
        "panel",
        label=label,
        device_name=state.device.device_name,
        rows=panel_rows(state),
        locating=state.locating,
    )


def render_map(state: UiState) -> str:
    view = map_view(state)
    return render_output(
        "map",
        region=view.region,
        markers=view.markers,
        zoom=view.zoom,
        osm_url=view.osm_url,
    )


def render_state(state: UiState, label: str) -> RenderableType:
    """The whole screen as a rich renderable: map on top, panel below."""
    return Group(
        Panel(Text(render_map(state)), title="Map", border_style="blue"),
        Panel(Text(render_panel(state, label)), border_style="white"),
    )


def device_table(device: DeviceDescriptor) -> Table:
    """Every device descriptor field, memory in MB."""
    table = Table(title="Device")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    rows = [
        ("Brand", device.brand),
        ("Manufacturer", device.manufacturer),
        ("Model", device.model_name),
        ("OS", device.os_name),
        ("OS version", device.os_version),
        ("Device name", device.device_name),
        ("Total memory", device.total_memory_mb),
    ]
    for name, value in rows:
        table.add_row(name, value or "")
    return table
