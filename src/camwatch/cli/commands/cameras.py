from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from camwatch.cli.common import (
    build_registry,
    exit_invalid,
    exit_not_found,
    load_settings_or_exit,
)
from camwatch.core import camera_filter
from camwatch.errors import CameraNotFoundError
from camwatch.models import Camera, CameraStatus


def _format_ms(value: int | None) -> str:
    if not value:
        return ""
    return datetime.fromtimestamp(value / 1000).strftime("%Y-%m-%d %H:%M:%S")


def _status_markup(camera: Camera) -> str:
    if camera.deleted:
        return "[dim]deleted[/dim]"
    if camera.status is CameraStatus.ONLINE:
        return "[green]online[/green]"
    return "[red]offline[/red]"


def _render_table(cameras: list[Camera]) -> Table:
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("IP")
    table.add_column("Address")
    table.add_column("Position")
    table.add_column("Status")
    table.add_column("Last check")

    for camera in cameras:
        table.add_row(
            camera.id,
            camera.name,
            camera.ip,
            camera.address,
            f"{camera.lat:.4f}, {camera.lng:.4f}",
            _status_markup(camera),
            _format_ms(camera.last_check_at),
        )
    return table


def list_cameras(
    query: Annotated[
        str | None,
        typer.Option("--query", "-q", help="Filter by name, address or IP"),
    ] = None,
    status: Annotated[
        CameraStatus | None,
        typer.Option("--status", "-s", help="Only cameras with this status"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include deleted cameras"),
    ] = False,
) -> None:
    """List cameras."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)
    console = Console()

    predicate = camera_filter(query, status)
    if show_all:
        cameras = [camera for camera in registry.cameras if predicate(camera)]
    else:
        cameras = registry.list_active(predicate)

    if not cameras:
        console.print("No cameras found.")
        return

    console.print(_render_table(cameras))


def add_camera(
    name: str = typer.Argument(..., help="Camera name"),
    ip: str = typer.Option("", "--ip", help="Network address (host or host:port)"),
    address: str = typer.Option("", "--address", help="Street address"),
    lat: float = typer.Option(..., "--lat", help="Latitude"),
    lng: float = typer.Option(..., "--lng", help="Longitude"),
    video_url: str | None = typer.Option(None, "--video-url", help="Stream URL"),
    status: CameraStatus = typer.Option(CameraStatus.ONLINE, "--status"),
) -> None:
    """Add a camera."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    try:
        camera = registry.create_camera(
            name=name,
            ip=ip,
            address=address,
            lat=lat,
            lng=lng,
            video_url=video_url,
            status=status,
        )
    except ValueError as exc:
        raise exit_invalid(exc) from exc

    console = Console()
    console.print(f"[green]✓[/green] Added '{camera.name}' as {camera.id}")


def pin_camera(
    lat: float = typer.Argument(..., help="Latitude"),
    lng: float = typer.Argument(..., help="Longitude"),
    name: str | None = typer.Option(None, "--name", help="Camera name"),
) -> None:
    """Add a camera at a location with generated defaults."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    fields: dict[str, Any] = {}
    if name:
        fields["name"] = name
    try:
        camera = registry.create_pinned_camera(lat, lng, **fields)
    except ValueError as exc:
        raise exit_invalid(exc) from exc

    console = Console()
    console.print(f"[green]✓[/green] Pinned '{camera.name}' at {camera.address}")


def edit_camera(
    camera_id: str = typer.Argument(..., help="Camera id"),
    name: str | None = typer.Option(None, "--name"),
    ip: str | None = typer.Option(None, "--ip"),
    address: str | None = typer.Option(None, "--address"),
    lat: float | None = typer.Option(None, "--lat"),
    lng: float | None = typer.Option(None, "--lng"),
    video_url: str | None = typer.Option(None, "--video-url"),
    status: CameraStatus | None = typer.Option(None, "--status"),
) -> None:
    """Change fields of a camera."""
    fields = {
        key: value
        for key, value in {
            "name": name,
            "ip": ip,
            "address": address,
            "lat": lat,
            "lng": lng,
            "video_url": video_url,
            "status": status,
        }.items()
        if value is not None
    }
    console = Console()
    if not fields:
        console.print("[yellow]![/yellow] Nothing to change")
        raise typer.Exit(1)

    settings = load_settings_or_exit()
    registry = build_registry(settings)
    try:
        camera = registry.update_camera(camera_id, **fields)
    except CameraNotFoundError as exc:
        raise exit_not_found(exc) from exc
    except ValueError as exc:
        raise exit_invalid(exc) from exc

    console.print(f"[green]✓[/green] Updated '{camera.name}'")


def remove_camera(camera_id: str = typer.Argument(..., help="Camera id")) -> None:
    """Delete a camera (kept as a tombstone so the delete syncs)."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()
    try:
        registry.soft_delete(camera_id)
    except CameraNotFoundError as exc:
        raise exit_not_found(exc) from exc
    console.print(f"[green]✓[/green] Removed camera '{camera_id}'")


def restore_camera(camera_id: str = typer.Argument(..., help="Camera id")) -> None:
    """Undo a delete."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()
    try:
        camera = registry.restore(camera_id)
    except CameraNotFoundError as exc:
        raise exit_not_found(exc) from exc
    console.print(f"[green]✓[/green] Restored '{camera.name}'")


def show_stats() -> None:
    """Show camera counts."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)
    stats = registry.stats()

    console = Console()
    console.print(f"Total: {stats.total}")
    console.print(f"Online: [green]{stats.online}[/green]")
    console.print(f"Offline: [red]{stats.offline}[/red]")


def register(app: typer.Typer) -> None:
    app.command("list")(list_cameras)
    app.command("add")(add_camera)
    app.command("pin")(pin_camera)
    app.command("edit")(edit_camera)
    app.command("remove")(remove_camera)
    app.command("restore")(restore_camera)
    app.command("stats")(show_stats)
