"""
Environment overrides in territory_war.config.
"""

import importlib

import pytest

from territory_war import config
from territory_war.engine.errors import InvalidConfig


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    # restore defaults for the rest of the suite
    monkeypatch.undo()
    importlib.reload(config)


def test_integer_overrides_are_parsed(monkeypatch, reload_config):
    monkeypatch.setenv("WAR_TERRITORY_COUNT", "3")
    monkeypatch.setenv("WAR_RANDOM_SEED", "42")

    reload_config()

    assert config.TERRITORY_COUNT == 3
    assert config.RANDOM_SEED == 42


@pytest.mark.parametrize("name", ["WAR_TERRITORY_COUNT", "WAR_RANDOM_SEED", "WAR_HISTORY_LIMIT"])
def test_malformed_integer_names_the_variable(monkeypatch, reload_config, name):
    monkeypatch.setenv(name, "five")

    with pytest.raises(InvalidConfig, match=name):
        reload_config()


def test_defaults_without_overrides(monkeypatch, reload_config):
    for name in ("WAR_TERRITORY_COUNT", "WAR_RANDOM_SEED", "WAR_HISTORY_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    reload_config()

    assert config.TERRITORY_COUNT == 5
    assert config.RANDOM_SEED is None
    assert config.HISTORY_LIMIT == 200
