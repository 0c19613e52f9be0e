import importlib

import pytest

from impact_api import settings

ENV_NAMES = ("LAND_DATA_URL", "HTTP_TIMEOUT_S", "LOAD_LAND_MASK", "STRICT_VALIDATION", "ANGLE_MODE")


@pytest.fixture
def reload_settings(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield lambda: importlib.reload(settings)
    monkeypatch.undo()
    importlib.reload(settings)


def test_defaults(reload_settings):
    s = reload_settings()
    assert s.LAND_DATA_URL.endswith("land-110m.json")
    assert s.HTTP_TIMEOUT_S == 10.0
    assert s.LOAD_LAND_MASK is True
    assert s.STRICT_VALIDATION is False
    assert s.ANGLE_MODE == "crater"


def test_values_from_environment(reload_settings, monkeypatch):
    monkeypatch.setenv("LAND_DATA_URL", "https://example.invalid/land.json")
    monkeypatch.setenv("HTTP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("LOAD_LAND_MASK", "off")
    monkeypatch.setenv("STRICT_VALIDATION", " Yes ")
    monkeypatch.setenv("ANGLE_MODE", "energy")
    s = reload_settings()
    assert s.LAND_DATA_URL == "https://example.invalid/land.json"
    assert s.HTTP_TIMEOUT_S == 2.5
    assert s.LOAD_LAND_MASK is False
    assert s.STRICT_VALIDATION is True
    assert s.ANGLE_MODE == "energy"


def test_blank_values_use_defaults(reload_settings, monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_S", "")
    monkeypatch.setenv("LOAD_LAND_MASK", "  ")
    s = reload_settings()
    assert s.HTTP_TIMEOUT_S == 10.0
    assert s.LOAD_LAND_MASK is True


@pytest.mark.parametrize("name,value", [
    ("HTTP_TIMEOUT_S", "ten"),
    ("LOAD_LAND_MASK", "maybe"),
    ("STRICT_VALIDATION", "2"),
    ("ANGLE_MODE", "sideways"),
])
def test_invalid_values_name_the_variable(reload_settings, monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        reload_settings()
