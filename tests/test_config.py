from __future__ import annotations

import pytest

from camwatch.config import (
    ProbeConfig,
    Settings,
    SyncConfig,
    get_settings,
    load_settings,
    write_settings,
)


def test_config_roundtrip(tmp_path):
    path = tmp_path / "config.toml"
    settings = Settings(
        sync=SyncConfig(filename="fleet.json", timeout=3.5),
        probe=ProbeConfig(port=8554, simulate=True),
    )
    write_settings(settings, path)

    loaded = load_settings(path)

    assert loaded == settings


def test_invalid_toml_raises_value_error(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[sync\n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[sync]\ntoken = 'nope'\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_env_var_pointing_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("CAMWATCH_CONFIG", str(tmp_path / "missing.toml"))

    with pytest.raises(FileNotFoundError):
        get_settings()


def test_env_var_config_is_used(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    write_settings(Settings(sync=SyncConfig(api_url="https://gh.local")), path)
    monkeypatch.setenv("CAMWATCH_CONFIG", str(path))

    assert get_settings().sync.api_url == "https://gh.local"
