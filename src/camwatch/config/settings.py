from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import default_config_path, default_data_dir, expand_path

CONFIG_ENV_VAR = "CAMWATCH_CONFIG"


class StorageConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class SyncConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    api_url: str = "https://api.github.com"
    filename: str = Field(default="cameras.json", min_length=1)
    timeout: float = Field(default=15.0, gt=0)


class ProbeConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    port: int = Field(default=554, ge=1, le=65535)
    timeout: float = Field(default=2.0, gt=0)
    parallel_probes: int = Field(default=20, ge=1, le=255)
    simulate: bool = False


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    storage: StorageConfig = Field(default_factory=StorageConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.storage.path)


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# camwatch configuration",
        "",
        "[storage]",
        f"path = {_toml_string(settings.storage.path)}",
        "",
        "[sync]",
        f"api_url = {_toml_string(settings.sync.api_url)}",
        f"filename = {_toml_string(settings.sync.filename)}",
        f"timeout = {settings.sync.timeout}",
        "",
        "[probe]",
        f"port = {settings.probe.port}",
        f"timeout = {settings.probe.timeout}",
        f"parallel_probes = {settings.probe.parallel_probes}",
        f"simulate = {'true' if settings.probe.simulate else 'false'}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
