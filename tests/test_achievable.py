import math

import pytest

from erlang_engine.achievable import (
    achievable_to_dict,
    calculate_achievable_metrics,
    effective_agents_under_cap,
)
from erlang_engine.erlangc import service_level_erlang_c
from erlang_engine.inputs import Behavior, Constraints, WorkloadInput

REFERENCE = WorkloadInput(volume=100, aht_seconds=180)  # 10 Erlangs


def test_effective_agents_under_cap():
    assert effective_agents_under_cap(10, 10) == (10, 1.0)
    assert effective_agents_under_cap(20, 12) == (20, 1.0)

    effective, penalty = effective_agents_under_cap(14, 15)
    assert effective == 13
    assert penalty == pytest.approx(14 / 15)

    effective, _ = effective_agents_under_cap(30, 39)
    assert effective == 23


def test_cap_not_binding_uses_actual_agents():
    res = calculate_achievable_metrics("C", 14, REFERENCE, Constraints(0.8, 20, 0.90), Behavior())
    assert res is not None
    assert not res.occupancy_cap_applied
    assert res.effective_agents == 14
    assert res.required_agents_for_max_occupancy == 12
    assert res.occupancy_penalty is None
    assert res.occupancy_shortfall == 0
    assert res.service_level == pytest.approx(0.8884, abs=1e-3)
    assert res.asa_seconds == pytest.approx(7.83, abs=0.05)


def test_binding_cap_degrades_performance():
    res = calculate_achievable_metrics("C", 14, REFERENCE, Constraints(0.8, 20, 0.70), Behavior())
    assert res is not None
    assert res.occupancy_cap_applied
    assert res.required_agents_for_max_occupancy == 15
    assert res.effective_agents == 13
    assert res.occupancy_penalty == pytest.approx(14 / 15)
    assert res.occupancy_shortfall == 1
    assert res.service_level == pytest.approx(0.7956, abs=1e-3)
    assert res.asa_seconds == pytest.approx(17.1, abs=0.1)
    assert res.occupancy == pytest.approx(0.70)
    assert res.actual_occupancy == pytest.approx(10 / 14)


def test_strict_cap_never_looks_better():
    # 30 agents, 200 calls, 240s AHT, 30 minutes
    workload = WorkloadInput(volume=200, aht_seconds=240)
    relaxed = calculate_achievable_metrics("C", 30, workload, Constraints(0.8, 20, 0.90), Behavior())
    strict = calculate_achievable_metrics("C", 30, workload, Constraints(0.8, 20, 0.70), Behavior())
    assert relaxed is not None and strict is not None

    assert not relaxed.occupancy_cap_applied
    assert relaxed.service_level == pytest.approx(service_level_erlang_c(30, 200 * 240 / 1800, 240, 20))

    assert strict.occupancy_cap_applied
    assert strict.effective_agents == 23
    assert strict.service_level < relaxed.service_level
    assert strict.asa_seconds > relaxed.asa_seconds
    assert math.isinf(strict.asa_seconds)
    assert strict.effective_agents <= strict.actual_agents


def test_total_fte_uses_actual_agents():
    res = calculate_achievable_metrics("C", 14, REFERENCE, Constraints(0.8, 20, 0.70), Behavior(shrinkage=0.3))
    assert res is not None
    assert res.total_fte == pytest.approx(20.0)


def test_erlang_a_reverse():
    behavior = Behavior(average_patience_seconds=180)
    res = calculate_achievable_metrics("A", 14, REFERENCE, Constraints(0.8, 20, 0.90), behavior)
    assert res is not None
    assert res.service_level == pytest.approx(0.9001, abs=1e-3)
    assert res.abandonment_rate is not None and res.abandonment_rate > 0
    assert res.expected_abandonments == pytest.approx(100 * res.abandonment_rate)

    assert calculate_achievable_metrics("A", 14, REFERENCE, Constraints(0.8, 20, 0.90), Behavior()) is None


def test_erlang_b_reverse():
    res = calculate_achievable_metrics("B", 12, REFERENCE, Constraints(0.8, 20, 1.0), Behavior())
    assert res is not None
    assert res.blocking_probability == pytest.approx(0.1197, abs=1e-3)
    assert res.asa_seconds == 0.0


def test_no_load():
    res = calculate_achievable_metrics("C", 5, WorkloadInput(0, 180), Constraints(0.8, 20, 0.9), Behavior())
    assert res is not None
    assert res.service_level == 1.0
    assert res.asa_seconds == 0.0
    assert res.occupancy == 0.0
    assert not res.occupancy_cap_applied


def test_non_positive_headcount():
    assert calculate_achievable_metrics("C", 0, REFERENCE, Constraints(0.8, 20, 0.9), Behavior()) is None


def test_achievable_to_dict():
    res = calculate_achievable_metrics("C", 14, REFERENCE, Constraints(0.8, 20, 0.70), Behavior())
    assert res is not None
    d = achievable_to_dict(res)
    assert d["occupancy_cap_applied"] is True
    assert d["effective_agents"] == 13
    assert d["occupancy_shortfall"] == 1


def test_missing_projection_returns_none(monkeypatch):
    monkeypatch.setattr("erlang_engine.achievable.project_load", lambda *args, **kwargs: None)
    assert calculate_achievable_metrics("C", 14, REFERENCE, Constraints(0.8, 20, 0.9), Behavior()) is None
