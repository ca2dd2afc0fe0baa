import logging

import pytest

from erlang_engine.erlangb import erlang_b
from erlang_engine.erlangc import asa_erlang_c, service_level_erlang_c
from erlang_engine.inputs import Behavior, Constraints, WorkloadInput
from erlang_engine.projector import normalize_model, project, project_load, requires_patience


@pytest.mark.parametrize("name", ["erlangB", "ErlangB", "b", " B "])
def test_normalize_erlang_b(name):
    assert normalize_model(name) == "B"


@pytest.mark.parametrize("name", ["erlangA", "a", "erlangX", "X"])
def test_normalize_erlang_a(name):
    assert normalize_model(name) == "A"


@pytest.mark.parametrize("name", ["erlangC", "c", "", "something-else"])
def test_normalize_defaults_to_erlang_c(name):
    assert normalize_model(name) == "C"


def test_requires_patience():
    assert requires_patience("erlangA")
    assert not requires_patience("C")


def test_erlang_b_projection_has_no_queue():
    proj = project_load("B", 12, 10.0, 180, 20)
    assert proj is not None
    assert proj.asa_seconds == 0.0
    assert proj.blocking_probability == pytest.approx(erlang_b(12, 10))
    assert proj.service_level == pytest.approx(1 - erlang_b(12, 10))
    # carried load over lines, not offered load
    assert proj.occupancy < 10 / 12


def test_erlang_c_projection():
    proj = project_load("C", 14, 10.0, 180, 20)
    assert proj is not None
    assert proj.service_level == pytest.approx(service_level_erlang_c(14, 10, 180, 20))
    assert proj.asa_seconds == pytest.approx(asa_erlang_c(14, 10, 180))
    assert proj.occupancy == pytest.approx(10 / 14)
    assert proj.abandonment_rate is None


def test_erlang_a_projection_needs_patience():
    assert project_load("A", 14, 10.0, 180, 20) is None

    proj = project_load("A", 14, 10.0, 180, 20, average_patience_seconds=180)
    assert proj is not None
    assert proj.abandonment_rate is not None and proj.abandonment_rate > 0


def test_project_warns_without_patience(caplog):
    workload = WorkloadInput(volume=100, aht_seconds=180)
    with caplog.at_level(logging.WARNING, logger="erlang_engine.projector"):
        assert project("erlangA", 14, workload, Constraints(0.8, 20), Behavior()) is None
    assert "patience" in caplog.text


def test_project_applies_concurrency():
    voice = project("C", 14, WorkloadInput(100, 180), Constraints(0.8, 20), Behavior())
    chat = project("C", 14, WorkloadInput(100, 540), Constraints(0.8, 20), Behavior(concurrency=3))
    assert voice is not None and chat is not None
    assert chat.service_level == pytest.approx(voice.service_level)
