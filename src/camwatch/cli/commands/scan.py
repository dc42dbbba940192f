from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from camwatch.cli.common import build_registry, load_settings_or_exit
from camwatch.core import build_probe, scan_statuses
from camwatch.models import CameraStatus

logger = logging.getLogger(__name__)


def scan() -> None:
    """Probe all cameras and update their online status."""
    console = Console()

    settings = load_settings_or_exit()
    registry = build_registry(settings)
    probe = build_probe(settings.probe)

    logger.info(
        "Probe settings: port=%d, timeout=%.2fs, parallel_probes=%d",
        settings.probe.port,
        settings.probe.timeout,
        settings.probe.parallel_probes,
    )
    console.print(f"Checking {len(registry.list_active())} camera(s)...")
    updated = asyncio.run(
        scan_statuses(registry, probe, settings.probe.parallel_probes)
    )

    if not updated:
        console.print("No cameras to check.")
        return

    for camera in updated:
        mark = (
            "[green]online[/green]"
            if camera.status is CameraStatus.ONLINE
            else "[red]offline[/red]"
        )
        console.print(f"  • {camera.name} ({camera.ip}): {mark}")

    online = sum(1 for camera in updated if camera.status is CameraStatus.ONLINE)
    console.print(f"\n[green]{online}[/green]/{len(updated)} camera(s) online")


def register(app: typer.Typer) -> None:
    app.command()(scan)
