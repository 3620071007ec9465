"""
Shared fixtures.
"""

from pathlib import Path

import pytest
import yaml

from stacker.stack_core import config_loader
from stacker.stack_core.config_loader import load_config

DEFAULT_CONFIG_PATH = Path(config_loader.__file__).parent.parent / "game_config.yaml"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def config_path_factory(tmp_path):
    """
    Write a copy of the default config with overrides and return its path.

    Overrides are keyed by "section.key", e.g. {"speeds.y": 7}.
    """
    def _make(overrides):
        with open(DEFAULT_CONFIG_PATH, "r") as f:
            raw = yaml.safe_load(f)
        for dotted, value in overrides.items():
            section, key = dotted.split(".")
            raw.setdefault(section, {})[key] = value
        path = tmp_path / f"config_{len(list(tmp_path.iterdir()))}.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(raw, f)
        return str(path)

    return _make


@pytest.fixture
def config_factory(config_path_factory):
    """Load a config with overrides applied."""
    def _make(overrides):
        return load_config(config_path_factory(overrides))

    return _make
