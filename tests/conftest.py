from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from camwatch.config import (
    Settings,
    StorageConfig,
    get_settings,
    write_settings,
)
from camwatch.models import Camera, CameraStatus
from camwatch.storage import LocalStore


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CAMWATCH_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_camera() -> Callable[..., Camera]:
    def _make(camera_id: str, updated_at: int = 100, **fields: Any) -> Camera:
        data: dict[str, Any] = {
            "name": f"Camera {camera_id}",
            "ip": "192.168.1.10",
            "address": "Đà Lạt",
            "lat": 11.94,
            "lng": 108.45,
            "status": CameraStatus.ONLINE,
        }
        data.update(fields)
        return Camera(id=camera_id, updated_at=updated_at, **data)

    return _make


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "data", seed=[])


@pytest.fixture
def settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    config_path = tmp_path / "config.toml"
    write_settings(Settings(storage=StorageConfig(path=str(data_dir))), config_path)
    monkeypatch.setenv("CAMWATCH_CONFIG", str(config_path))
    get_settings.cache_clear()
    return data_dir
