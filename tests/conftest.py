"""Pytest configuration and fixtures for termlight tests."""

import sys
from pathlib import Path
from typing import Any

import pytest
import yaml

repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def clean_termlight_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that change detection or configuration.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture, restores the variables after the test
    """
    for name in ("COLORFGBG", "TERMLIGHT_CONFIG", "TERMLIGHT_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary config file path and point TERMLIGHT_CONFIG at it.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture, restores the variable after the test

    Returns
    -------
    Path
        Path to temporary config file
    """
    config_path = tmp_path / "termlight.yaml"
    monkeypatch.setenv("TERMLIGHT_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def write_config(config_file: Path):
    """Helper fixture to write config data to file.

    Parameters
    ----------
    config_file : Path
        Path to config file from config_file fixture

    Returns
    -------
    callable
        Function that takes config_data dict and writes to file
    """

    def _write(config_data: dict[str, Any]) -> None:
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

    return _write
