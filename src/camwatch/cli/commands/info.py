from __future__ import annotations

import typer
from rich.console import Console

from camwatch.cli.common import (
    build_registry,
    load_settings_or_exit,
    resolve_config_path_or_exit,
)


def register(app: typer.Typer) -> None:
    @app.command()
    def info() -> None:
        """Show camwatch data directory info and stats."""
        settings = load_settings_or_exit()
        registry = build_registry(settings)
        store = registry.store
        credentials = store.load_credentials()

        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)

        console = Console()

        console.print("[bold]camwatch Info[/bold]\n")
        console.print(f"Data directory: {store.path}")
        console.print(f"Camera list: {store.cameras_path}")
        console.print(f"Config file: {config_path if config_exists else 'defaults'}")

        console.print("\n[bold]Sync[/bold]")
        console.print(f"API: {settings.sync.api_url}")
        console.print(f"Gist file: {settings.sync.filename}")
        if credentials.is_configured:
            console.print(f"Gist: {credentials.document_id}")
        else:
            console.print("Not configured")

        stats = registry.stats()
        tombstones = len(registry.cameras) - stats.total
        console.print("\n[bold]Statistics[/bold]")
        console.print(f"Cameras: {stats.total}")
        console.print(f"Online: {stats.online}")
        console.print(f"Offline: {stats.offline}")
        console.print(f"Deleted (kept for sync): {tombstones}")
