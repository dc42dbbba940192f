from __future__ import annotations

from pathlib import Path

import typer

from camwatch.config import (
    Settings,
    data_dir_from_settings,
    get_settings,
    resolve_config_path,
)
from camwatch.core import CameraRegistry
from camwatch.errors import CameraNotFoundError
from camwatch.storage import LocalStore


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_store(settings: Settings, data_dir: Path | None = None) -> LocalStore:
    path = data_dir or data_dir_from_settings(settings)
    return LocalStore(path)


def build_registry(settings: Settings) -> CameraRegistry:
    return CameraRegistry(build_store(settings))


def exit_not_found(exc: CameraNotFoundError) -> typer.Exit:
    typer.echo(str(exc), err=True)
    return typer.Exit(1)


def exit_invalid(exc: ValueError) -> typer.Exit:
    typer.echo(f"Invalid camera data: {exc}", err=True)
    return typer.Exit(1)
