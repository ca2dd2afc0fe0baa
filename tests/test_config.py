import logging

import pytest

from erlang_engine.config import EngineSettings, configure_logging, load_settings_from_env
from erlang_engine.search import SearchConfig

ENV_NAMES = [
    "ERLANG_SEARCH_TRAFFIC_MULTIPLE",
    "ERLANG_SEARCH_LOW_TRAFFIC_FLOOR",
    "ERLANG_SEARCH_HEADROOM",
    "ERLANG_DEFAULT_INTERVAL_MINUTES",
    "ERLANG_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    settings = load_settings_from_env()
    assert settings == EngineSettings()
    assert settings.search == SearchConfig(traffic_multiple=3.0, low_traffic_floor=10, headroom=50)
    assert settings.default_interval_minutes == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ERLANG_SEARCH_TRAFFIC_MULTIPLE", "5")
    monkeypatch.setenv("ERLANG_SEARCH_HEADROOM", "100")
    monkeypatch.setenv("ERLANG_DEFAULT_INTERVAL_MINUTES", "15")
    monkeypatch.setenv("ERLANG_LOG_LEVEL", "debug")

    settings = load_settings_from_env()
    assert settings.search.traffic_multiple == 5.0
    assert settings.search.headroom == 100
    assert settings.search.low_traffic_floor == 10
    assert settings.default_interval_minutes == 15
    assert settings.log_level == "DEBUG"


def test_bad_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("ERLANG_SEARCH_HEADROOM", "lots")
    with caplog.at_level(logging.WARNING, logger="erlang_engine.config"):
        settings = load_settings_from_env()
    assert settings.search.headroom == 50
    assert "ERLANG_SEARCH_HEADROOM" in caplog.text


def test_explicit_defaults_are_the_base(monkeypatch):
    base = EngineSettings(search=SearchConfig(headroom=5), default_interval_minutes=60)
    monkeypatch.setenv("ERLANG_SEARCH_LOW_TRAFFIC_FLOOR", "20")

    settings = load_settings_from_env(defaults=base)
    assert settings.search.headroom == 5
    assert settings.search.low_traffic_floor == 20
    assert settings.default_interval_minutes == 60


def test_configure_logging_uses_level_name(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")
    assert calls["level"] == logging.DEBUG

    monkeypatch.setenv("ERLANG_LOG_LEVEL", "error")
    configure_logging()
    assert calls["level"] == logging.ERROR
