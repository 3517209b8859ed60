from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "csv-formatter" / "config.json"


@pytest.fixture
def write_csv(tmp_path):
    def _write(text: str, name: str = "data.csv"):
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
