from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from camwatch.cli.common import (
    build_store,
    load_settings_or_exit,
    resolve_config_path_or_exit,
)


def register(app: typer.Typer) -> None:
    @app.command()
    def init(
        data_dir: Annotated[
            Path | None,
            typer.Option("--data-dir", "--path", help="Custom data directory"),
        ] = None,
    ) -> None:
        """Initialize the camwatch data directory with demo cameras."""
        console = Console()

        settings = load_settings_or_exit()
        store = build_store(settings, data_dir=data_dir)
        created = store.init()

        if created:
            console.print(f"[green]✓[/green] Initialized data dir: {store.path}")
            console.print(f"  • {store.cameras_path} - Camera list")
        else:
            console.print(f"[dim]Data dir exists:[/dim] {store.path}")

        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)
        if not config_exists:
            console.print(
                "\nConfig not found. Run 'camwatch config init' to create one."
            )
        else:
            console.print(f"  • {config_path} - Configuration")
