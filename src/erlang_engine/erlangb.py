# src/erlang_engine/erlangb.py
from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)

MAX_LINES_DEFAULT: int = 10_000


def erlang_b(agents: float, traffic: float) -> float:
    """
    Erlang B blocking probability (loss system, no queue).

    B(0) = 1
    B(k) = A * B(k-1) / (k + A * B(k-1))   for k = 1..agents

    The recurrence avoids the overflow of a direct A^n / n! evaluation.
    Non-integer agent counts are truncated toward zero.
    """
    if agents <= 0:
        return 1.0
    if traffic <= 0:
        return 0.0

    a = float(traffic)
    b = 1.0
    for k in range(1, int(agents) + 1):
        ab = a * b
        b = ab / (k + ab)
    return max(0.0, min(1.0, float(b)))


def carried_traffic(agents: float, traffic: float) -> float:
    """Traffic actually served by the lines: A * (1 - B)."""
    if traffic <= 0:
        return 0.0
    return float(traffic) * (1.0 - erlang_b(agents, traffic))


def required_lines(traffic: float, target_blocking: float, max_lines: int = MAX_LINES_DEFAULT) -> Optional[int]:
    """
    Smallest number of lines whose blocking probability is <= target_blocking.
    Returns None when max_lines is not enough.
    """
    if traffic <= 0:
        return 0

    # B is non-increasing in lines, so scan up from just below the load.
    lines = max(int(traffic), 1)
    while lines <= max_lines:
        if erlang_b(lines, traffic) <= target_blocking:
            return lines
        lines += 1

    logger.info(
        "Blocking target %.4f not reachable within %d lines (A=%.3f)", target_blocking, max_lines, traffic
    )
    return None


__all__ = [
    "MAX_LINES_DEFAULT",
    "erlang_b",
    "carried_traffic",
    "required_lines",
]
