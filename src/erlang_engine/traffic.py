# src/erlang_engine/traffic.py
from __future__ import annotations

SECONDS_PER_MINUTE: int = 60
DEFAULT_INTERVAL_MINUTES: int = 30


def interval_seconds(interval_minutes: float) -> float:
    return float(interval_minutes) * SECONDS_PER_MINUTE


def traffic_intensity(volume: float, aht_seconds: float, interval_seconds: float) -> float:
    """
    Offered load A (Erlangs) = arrival_rate * AHT.
    With arrivals measured as count per interval:
      arrival_rate = volume / interval_seconds
      => A = volume * aht_seconds / interval_seconds

    Any non-positive input means "no load" and returns 0.0.
    """
    if volume <= 0 or aht_seconds <= 0 or interval_seconds <= 0:
        return 0.0
    return float(volume) * float(aht_seconds) / float(interval_seconds)


__all__ = [
    "SECONDS_PER_MINUTE",
    "DEFAULT_INTERVAL_MINUTES",
    "interval_seconds",
    "traffic_intensity",
]
