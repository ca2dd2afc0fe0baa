# src/erlang_engine/inputs.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .traffic import DEFAULT_INTERVAL_MINUTES, interval_seconds, traffic_intensity


def as_fraction(value: float) -> float:
    """
    Reads a rate given either as a fraction (0.8) or a percentage (80).
    Anything above 1 is taken as a percentage.
    """
    v = float(value)
    return v / 100.0 if v > 1.0 else v


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class WorkloadInput:
    volume: float
    aht_seconds: float
    interval_minutes: float = DEFAULT_INTERVAL_MINUTES

    @property
    def interval_seconds(self) -> float:
        return interval_seconds(self.interval_minutes)

    def effective_aht(self, concurrency: int = 1) -> float:
        # Concurrent sessions share the agent's time.
        return float(self.aht_seconds) / max(int(concurrency), 1)

    def traffic(self, concurrency: int = 1) -> float:
        return traffic_intensity(self.volume, self.effective_aht(concurrency), self.interval_seconds)


@dataclass(frozen=True)
class Constraints:
    target_service_level: float
    threshold_seconds: float
    max_occupancy: float = 0.90

    @property
    def target(self) -> float:
        return as_fraction(self.target_service_level)

    @property
    def occupancy_cap(self) -> float:
        return as_fraction(self.max_occupancy)


@dataclass(frozen=True)
class Behavior:
    shrinkage: float = 0.0
    average_patience_seconds: Optional[float] = None
    concurrency: int = 1

    @property
    def shrinkage_fraction(self) -> float:
        return as_fraction(self.shrinkage)


def check_constraints(constraints: Constraints) -> None:
    """Raises ValueError for constraint values no calculation can interpret."""
    if not (0.0 <= constraints.target <= 1.0):
        raise ValueError("target_service_level must be in [0, 1] (or a percentage in [0, 100])")
    if constraints.threshold_seconds < 0:
        raise ValueError("threshold_seconds must be >= 0")
    if not (0.0 < constraints.occupancy_cap <= 1.0):
        raise ValueError("max_occupancy must be in (0, 1] (or a percentage in (0, 100])")


def check_behavior(behavior: Behavior) -> None:
    if int(behavior.concurrency) < 1:
        raise ValueError("concurrency must be >= 1")


__all__ = [
    "as_fraction",
    "WorkloadInput",
    "Constraints",
    "Behavior",
    "check_constraints",
    "check_behavior",
]
