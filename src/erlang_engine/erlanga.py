# src/erlang_engine/erlanga.py
"""
Erlang A: Erlang C corrected for customers leaving the queue.

Notation:
  c       agents
  A       offered load (Erlangs)
  s       spare capacity c - A
  E_C     Erlang C probability of wait
  theta   patience / AHT, the abandonment-rate parameter (per AHT)

A waiting customer leaves the queue through one of two exponential exits:
the queue draining at rate s / AHT, or abandoning at rate theta / AHT.
Abandoned contacts leave the queue and stop loading the agents, so

  gamma                 = (s + theta) / AHT
  P(wait > t)           = E_C * exp(-gamma * t)
  SL(t)                 = 1 - E_C * exp(-gamma * t)
  P(abandon)            = E_C * theta / (s + theta)
  ASA                   = E_C * AHT / (s + theta)

theta = 0 is Erlang C. For a fixed headcount SL(t) >= the Erlang C service
level and it rises with theta, so Erlang A never needs more agents than
Erlang C and a lower patience never needs fewer agents than a higher one.
"""
from __future__ import annotations

import math
from typing import Optional

from .erlangc import clamp01, erlang_c


def has_patience(average_patience_seconds: Optional[float]) -> bool:
    """Erlang A is undefined without a positive average patience."""
    return average_patience_seconds is not None and float(average_patience_seconds) > 0


def patience_ratio(average_patience_seconds: float, aht_seconds: float) -> float:
    """theta = patience / AHT; 0 when either is not positive."""
    if aht_seconds <= 0 or average_patience_seconds <= 0:
        return 0.0
    return float(average_patience_seconds) / float(aht_seconds)


def _queue_exit_rate(agents: float, traffic: float, aht_seconds: float, theta: float) -> float:
    return (float(agents) - float(traffic) + theta) / float(aht_seconds)


def abandonment_probability(agents: float, traffic: float, theta: float) -> float:
    if traffic <= 0 or theta <= 0:
        return 0.0
    if agents <= traffic:
        return 1.0

    pw = erlang_c(agents, traffic)
    if math.isinf(theta):
        return pw
    spare = float(agents) - float(traffic)
    return clamp01(pw * theta / (spare + theta))


def probability_wait_exceeds_erlang_a(
    agents: float,
    traffic: float,
    aht_seconds: float,
    threshold_seconds: float,
    average_patience_seconds: float,
) -> float:
    if traffic <= 0 or aht_seconds <= 0:
        return 0.0
    if agents <= traffic:
        return 1.0

    theta = patience_ratio(average_patience_seconds, aht_seconds)
    t = max(float(threshold_seconds), 0.0)
    pw = erlang_c(agents, traffic)
    return clamp01(pw * math.exp(-_queue_exit_rate(agents, traffic, aht_seconds, theta) * t))


def service_level_erlang_a(
    agents: float,
    traffic: float,
    aht_seconds: float,
    threshold_seconds: float,
    average_patience_seconds: float,
) -> float:
    if traffic <= 0 or aht_seconds <= 0:
        return 1.0
    if agents <= traffic:
        return 0.0
    return clamp01(
        1.0 - probability_wait_exceeds_erlang_a(
            agents, traffic, aht_seconds, threshold_seconds, average_patience_seconds
        )
    )


def asa_erlang_a(agents: float, traffic: float, aht_seconds: float, average_patience_seconds: float) -> float:
    if traffic <= 0:
        return 0.0
    if agents <= traffic:
        return math.inf

    theta = patience_ratio(average_patience_seconds, aht_seconds)
    pw = erlang_c(agents, traffic)
    spare = float(agents) - float(traffic)
    return max(0.0, pw * float(aht_seconds) / (spare + theta))


def expected_abandonments(volume: float, agents: float, traffic: float, theta: float) -> float:
    if volume <= 0:
        return 0.0
    return float(volume) * abandonment_probability(agents, traffic, theta)


__all__ = [
    "has_patience",
    "patience_ratio",
    "abandonment_probability",
    "probability_wait_exceeds_erlang_a",
    "service_level_erlang_a",
    "asa_erlang_a",
    "expected_abandonments",
]
