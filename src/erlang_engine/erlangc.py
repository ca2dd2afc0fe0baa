# src/erlang_engine/erlangc.py
from __future__ import annotations

import math

from .erlangb import erlang_b


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


def erlang_c(agents: float, traffic: float) -> float:
    """
    Erlang C probability of wait (Pw), derived from Erlang B:

      Pw = B * n / (n - a + a * B)     with B = erlang_b(n, a)

    Requires n > a for stability; an unstable queue waits with certainty.
    """
    if traffic <= 0:
        return 0.0
    if agents <= traffic:
        return 1.0

    n = float(agents)
    a = float(traffic)
    b = erlang_b(n, a)
    denom = n - a + a * b
    if denom <= 0:
        return 1.0
    return clamp01(b * n / denom)


def probability_wait_exceeds(agents: float, traffic: float, aht_seconds: float, threshold_seconds: float) -> float:
    """
    P(wait > T) = Pw * exp(-(n - a) * T / AHT)
    """
    if traffic <= 0 or aht_seconds <= 0:
        return 0.0
    if agents <= traffic:
        return 1.0

    t = max(float(threshold_seconds), 0.0)
    pw = erlang_c(agents, traffic)
    return clamp01(pw * math.exp(-(agents - traffic) * (t / float(aht_seconds))))


def service_level_erlang_c(agents: float, traffic: float, aht_seconds: float, threshold_seconds: float) -> float:
    """
    Service level for threshold T (seconds):

    SL(T) = 1 - Pw * exp(-(n-a) * (T / AHT))
    """
    if traffic <= 0 or aht_seconds <= 0:
        return 1.0
    if agents <= traffic:
        return 0.0
    return clamp01(1.0 - probability_wait_exceeds(agents, traffic, aht_seconds, threshold_seconds))


def asa_erlang_c(agents: float, traffic: float, aht_seconds: float) -> float:
    """
    Average Speed of Answer (ASA) for M/M/n without abandonment.

    ASA = Pw * (AHT / (n-a))
    """
    if traffic <= 0:
        return 0.0
    if agents <= traffic:
        return math.inf
    pw = erlang_c(agents, traffic)
    return max(0.0, pw * float(aht_seconds) / float(agents - traffic))


def occupancy(traffic: float, agents: float) -> float:
    if agents <= 0:
        return 0.0
    return clamp01(float(traffic) / float(agents))


__all__ = [
    "clamp01",
    "erlang_c",
    "probability_wait_exceeds",
    "service_level_erlang_c",
    "asa_erlang_c",
    "occupancy",
]
