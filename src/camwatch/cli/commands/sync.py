from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from camwatch.cli.common import build_registry, build_store, load_settings_or_exit
from camwatch.core import SyncOrchestrator
from camwatch.errors import NotConfiguredError, SyncError
from camwatch.models import SyncCredentials
from camwatch.remote import GistClient

logger = logging.getLogger(__name__)

creds_app = typer.Typer(no_args_is_help=True, help="Manage GitHub Gist credentials")


def _mask(value: str) -> str:
    if len(value) <= 4:
        return "*" * len(value)
    return f"{'*' * (len(value) - 4)}{value[-4:]}"


@creds_app.command("set")
def set_credentials(
    token: str = typer.Option(..., "--token", help="GitHub token with gist scope"),
    gist_id: str = typer.Option(..., "--gist", help="Gist id"),
) -> None:
    """Store the token and gist id used for sync."""
    settings = load_settings_or_exit()
    store = build_store(settings)
    store.save_credentials(SyncCredentials(credential=token, document_id=gist_id))
    Console().print(
        f"[green]✓[/green] Saved sync credentials to {store.credentials_path}"
    )


@creds_app.command("show")
def show_credentials() -> None:
    """Show the configured gist id and a masked token."""
    settings = load_settings_or_exit()
    store = build_store(settings)
    credentials = store.load_credentials()

    console = Console()
    if not credentials.is_configured:
        console.print("[yellow]![/yellow] Sync is not configured")
        console.print("Use 'camwatch creds set --token ... --gist ...'")
        raise typer.Exit(1)

    console.print(f"Gist: {credentials.document_id}")
    console.print(f"Token: {_mask(credentials.credential)}")


def sync() -> None:
    """Merge local cameras with the shared gist."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)
    client = GistClient(settings.sync)
    orchestrator = SyncOrchestrator(registry, client)
    console = Console()

    console.print(f"Syncing {registry.store.cameras_path} with GitHub gist...")
    try:
        merged = asyncio.run(orchestrator.request_sync())
    except NotConfiguredError as exc:
        console.print(f"[red]✗[/red] {exc}")
        console.print("Use 'camwatch creds set --token ... --gist ...'")
        raise typer.Exit(1) from None
    except SyncError as exc:
        logger.debug("Sync failed", exc_info=True)
        console.print(f"[red]✗[/red] Sync failed: {exc}")
        raise typer.Exit(1) from None
    finally:
        client.close()

    if merged is None:
        console.print("[yellow]![/yellow] A sync is already running")
        return

    active = sum(1 for camera in merged if not camera.deleted)
    console.print(f"[green]✓[/green] Synced {active} camera(s)")


def register(app: typer.Typer) -> None:
    app.command()(sync)
    app.add_typer(creds_app, name="creds")
