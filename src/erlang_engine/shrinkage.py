# src/erlang_engine/shrinkage.py
from __future__ import annotations

import math
from typing import Optional


def fte(productive_agents: float, shrinkage: float) -> float:
    """
    Total FTE needed so that `productive_agents` are available after shrinkage:

      FTE = productive / (1 - shrinkage)

    Shrinkage >= 1 means nobody is ever available, so the answer is inf.
    Negative shrinkage is treated as 0.
    """
    s = float(shrinkage)
    if s >= 1.0:
        return math.inf
    if s < 0.0:
        s = 0.0
    return float(productive_agents) / (1.0 - s)


def scheduled_agents(productive_agents: float, shrinkage: float) -> Optional[int]:
    """Whole scheduled headcount (on-phone -> scheduled); None when FTE is unbounded."""
    total = fte(productive_agents, shrinkage)
    if math.isinf(total):
        return None
    # round first so 14 / 0.7 stays 20, not 21
    return int(math.ceil(round(total, 9)))


__all__ = ["fte", "scheduled_agents"]
