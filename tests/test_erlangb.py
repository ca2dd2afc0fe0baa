import pytest

from erlang_engine.erlangb import carried_traffic, erlang_b, required_lines


def test_zero_agents_always_blocks():
    assert erlang_b(0, 10) == 1.0


def test_zero_traffic_never_blocks():
    assert erlang_b(10, 0) == 0.0


def test_negative_inputs_clamp_to_edges():
    assert erlang_b(-3, 10) == 1.0
    assert erlang_b(10, -5) == 0.0


def test_full_utilization_blocks_significantly():
    b = erlang_b(10, 10)
    assert 0.1 < b < 0.5
    assert b == pytest.approx(0.2146, abs=1e-4)


def test_reference_value():
    # 5 Erlangs offered to 10 lines
    assert erlang_b(10, 5) == pytest.approx(0.01838457, abs=1e-6)


def test_blocking_non_increasing_in_agents():
    for a in (0.5, 5.0, 10.0, 42.7):
        values = [erlang_b(n, a) for n in range(0, 80)]
        assert all(x >= y for x, y in zip(values, values[1:]))


def test_fractional_agents_truncate():
    assert erlang_b(10.9, 10) == erlang_b(10, 10)


def test_large_agent_counts_do_not_overflow():
    b = erlang_b(2000, 1800)
    assert 0.0 <= b <= 1.0


def test_required_lines_one_percent_at_ten_erlangs():
    # Classic table: 18 lines carry 10 Erlangs at 1% blocking
    assert required_lines(10, 0.01) == 18
    assert erlang_b(17, 10) > 0.01


def test_required_lines_no_load():
    assert required_lines(0, 0.01) == 0


def test_required_lines_gives_up():
    assert required_lines(10, 0.0, max_lines=30) is None


def test_carried_traffic():
    assert carried_traffic(12, 10) == pytest.approx(10 * (1 - erlang_b(12, 10)))
    assert carried_traffic(12, 0) == 0.0
