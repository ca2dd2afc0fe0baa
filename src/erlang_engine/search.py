# src/erlang_engine/search.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .projector import ErlangVariant, normalize_model, project_load

logger = logging.getLogger(__name__)


# -----------------------------
# Search window
# -----------------------------
@dataclass(frozen=True)
class SearchConfig:
    """
    Upper bound of the agent scan:
      max(ceil(A * traffic_multiple), low_traffic_floor, lower_bound + headroom)

    The floor keeps fractional-Erlang cases searchable; the headroom keeps
    very high targets (e.g. 99.9% in 5s) from running off the end.
    """
    traffic_multiple: float = 3.0
    low_traffic_floor: int = 10
    headroom: int = 50

    def ceiling(self, traffic: float, low: int) -> int:
        return max(
            int(math.ceil(traffic * self.traffic_multiple)),
            int(self.low_traffic_floor),
            int(low) + int(self.headroom),
        )


DEFAULT_SEARCH = SearchConfig()


def agents_for_occupancy(traffic: float, max_occupancy: float) -> int:
    """Fewest agents that keep A / n at or under the occupancy cap."""
    if traffic <= 0:
        return 0
    # round first so 27 / 0.9 stays 30
    return int(math.ceil(round(traffic / max_occupancy, 9)))


def lower_bound(model: ErlangVariant, traffic: float, max_occupancy: float) -> int:
    """
    Fewest agents worth testing: the occupancy cap (A / n <= max_occupancy)
    and, for queueing models, the stability floor n > A.
    """
    low = max(1, agents_for_occupancy(traffic, max_occupancy))
    if model != "B":
        low = max(low, int(math.floor(traffic)) + 1)
    return low


# -----------------------------
# Public API
# -----------------------------
def solve_agents(
    traffic: float,
    aht_seconds: float,
    target_service_level: float,
    threshold_seconds: float,
    max_occupancy: float = 0.90,
    *,
    model: str = "C",
    average_patience_seconds: Optional[float] = None,
    search: Optional[SearchConfig] = None,
) -> Optional[int]:
    """
    Minimum agents whose projected service level meets the target without
    breaking the occupancy cap. For Erlang B the service level is 1 - blocking.

    Linear scan upward from the lower bound; relies on service level being
    non-decreasing in agents for a fixed load.

    Returns 0 when there is no load and None when no agent count inside the
    search window meets the target (infeasible, not an error).
    """
    if traffic <= 0 or aht_seconds <= 0:
        return 0

    variant = normalize_model(model)
    cfg = search or DEFAULT_SEARCH

    low = lower_bound(variant, traffic, max_occupancy)
    high = cfg.ceiling(traffic, low)
    logger.debug("solve_agents model=%s A=%.4f window=[%d, %d]", variant, traffic, low, high)

    for n in range(low, high + 1):
        proj = project_load(variant, n, traffic, aht_seconds, threshold_seconds, average_patience_seconds)
        if proj is None:
            # Erlang A without patience: nothing to search.
            return None
        if proj.service_level >= target_service_level:
            logger.debug("solve_agents model=%s -> %d agents (SL=%.4f)", variant, n, proj.service_level)
            return n

    logger.info(
        "Target SL %.3f in %.0fs not reachable with <= %d agents (model=%s, A=%.3f, max_occ=%.2f)",
        target_service_level,
        threshold_seconds,
        high,
        variant,
        traffic,
        max_occupancy,
    )
    return None


__all__ = [
    "SearchConfig",
    "DEFAULT_SEARCH",
    "agents_for_occupancy",
    "lower_bound",
    "solve_agents",
]
