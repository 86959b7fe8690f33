#!/usr/bin/env python3
"""Command line host for the findme screen."""

import asyncio
import sys

from rich.console import Console

from findme.logging_config import configure_logging
from findme.models import LocateStage, UiState
from findme.orchestrator import LocationOrchestrator, build_orchestrator
from findme.settings import get_settings
from findme.view import device_table, render_state

console = Console()

STAGE_MESSAGES = {
    LocateStage.REQUESTING_PERMISSION: "Requesting location permission...",
    LocateStage.ACQUIRING_POSITION: "Acquiring position...",
    LocateStage.RESOLVING_ADDRESS: "Resolving country and city...",
}


def main():
    """Main CLI entry point."""
    args = sys.argv[1:]
    if args and args[0] in ["--help", "-h", "help"]:
        print_help()
        return

    settings = get_settings()
    configure_logging(settings.log_level)

    command = args[0] if args else "show"
    if command == "show":
        asyncio.run(show_command())
    elif command == "locate":
        asyncio.run(locate_command())
    elif command == "device":
        device_command()
    else:
        console.print(f"[red]Error:[/red] Unknown command '{command}'")
        print_help()
        sys.exit(1)


def print_help():
    """Print help message."""
    console.print("\n[bold]findme[/bold]")
    console.print("\nUsage: findme [COMMAND]\n")
    console.print("Commands:")
    console.print("  show      Load device info and public IP, then draw the screen (default)")
    console.print("  locate    Same as show, then press Find Me once")
    console.print("  device    Show the device descriptor\n")
    console.print("Configuration comes from FINDME_* environment variables or .env, e.g.")
    console.print("  FINDME_LOCATION_PERMISSION=granted findme locate")
    console.print("  FINDME_FIXED_LATITUDE=32.0 FINDME_FIXED_LONGITUDE=53.0 findme locate\n")


def _progress_listener():
    last_stage = LocateStage.IDLE

    def on_change(state: UiState) -> None:
        nonlocal last_stage
        if state.stage != last_stage and state.stage in STAGE_MESSAGES:
            console.print(f"[dim]{STAGE_MESSAGES[state.stage]}[/dim]")
        last_stage = state.stage

    return on_change


def _draw(orchestrator: LocationOrchestrator):
    console.print(render_state(orchestrator.store.state, get_settings().panel_label))


async def show_command():
    """Run the startup fetches and draw the screen."""
    orchestrator = build_orchestrator(console=console)
    await orchestrator.startup()
    _draw(orchestrator)


async def locate_command():
    """Run the startup fetches, locate once, and draw the screen."""
    orchestrator = build_orchestrator(console=console)
    await orchestrator.startup()

    unsubscribe = orchestrator.store.subscribe(_progress_listener())
    try:
        await orchestrator.find_me()
    finally:
        unsubscribe()
    _draw(orchestrator)


def device_command():
    """Print the device descriptor."""
    orchestrator = build_orchestrator(console=console)
    descriptor = orchestrator.load_device_descriptor()
    console.print(device_table(descriptor))


if __name__ == "__main__":
    main()
