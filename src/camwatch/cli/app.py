from __future__ import annotations

from typing import Annotated

import typer

from camwatch.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.cameras import register as register_cameras
from .commands.info import register as register_info
from .commands.init import register as register_init
from .commands.scan import register as register_scan
from .commands.sync import register as register_sync

app = typer.Typer(help="camwatch - camera fleet registry", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")

register_init(app)
register_cameras(app)
register_scan(app)
register_sync(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """camwatch CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"camwatch version {get_version('camwatch')}")
        raise typer.Exit()
