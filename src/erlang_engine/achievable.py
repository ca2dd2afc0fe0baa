# src/erlang_engine/achievable.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .erlanga import expected_abandonments, has_patience, patience_ratio
from .erlangc import occupancy
from .inputs import Behavior, Constraints, WorkloadInput, check_behavior, check_constraints
from .projector import ErlangVariant, normalize_model, project_load
from .search import agents_for_occupancy
from .shrinkage import fte

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievableMetrics:
    """
    What a fixed headcount can deliver once the occupancy cap is enforced.

    effective_agents <= actual_agents always holds; they differ only when the
    cap is applied.
    """
    model: ErlangVariant
    traffic_intensity: float
    service_level: float
    asa_seconds: float
    occupancy: float
    actual_occupancy: float
    effective_agents: int
    actual_agents: int
    total_fte: float
    occupancy_cap_applied: bool

    occupancy_penalty: Optional[float] = None
    required_agents_for_max_occupancy: Optional[int] = None
    blocking_probability: Optional[float] = None
    abandonment_rate: Optional[float] = None
    expected_abandonments: Optional[float] = None
    answered_contacts: Optional[float] = None

    @property
    def occupancy_shortfall(self) -> int:
        """Agents missing to respect the occupancy cap (0 when it holds)."""
        if not self.occupancy_cap_applied or self.required_agents_for_max_occupancy is None:
            return 0
        return max(self.required_agents_for_max_occupancy - self.actual_agents, 0)


def effective_agents_under_cap(actual_agents: int, required_agents: int) -> tuple[int, float]:
    """
    Returns (effective_agents, penalty) for a headcount that cannot reach
    the occupancy cap. penalty = actual / required, and usable capacity
    shrinks by the same factor.
    """
    if required_agents <= 0 or actual_agents >= required_agents:
        return int(actual_agents), 1.0
    penalty = max(0.0, min(1.0, actual_agents / required_agents))
    effective = int(math.floor(actual_agents * penalty))
    return min(effective, int(actual_agents) - 1), penalty


def calculate_achievable_metrics(
    model: str,
    fixed_agents: int,
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
) -> Optional[AchievableMetrics]:
    """
    Reverse solve: service level, ASA, occupancy and abandonment for a
    fixed agent count.

    When the headcount would push occupancy past the cap, the projection is
    recomputed on fewer effective agents and occupancy_cap_applied is set.

    Returns None for Erlang A without patience and for a non-positive
    headcount. constraints.target_service_level is not used here.
    """
    check_constraints(constraints)
    check_behavior(behavior)

    variant = normalize_model(model)
    patience = behavior.average_patience_seconds
    if variant == "A" and not has_patience(patience):
        logger.warning("Erlang A needs a positive average patience; no achievable metrics computed")
        return None

    actual = int(fixed_agents)
    if actual <= 0:
        logger.warning("Achievable metrics need a positive headcount, got %s", fixed_agents)
        return None

    aht = workload.effective_aht(behavior.concurrency)
    a = workload.traffic(behavior.concurrency)
    cap = constraints.occupancy_cap
    total_fte = fte(actual, behavior.shrinkage_fraction)

    if a <= 0:
        return AchievableMetrics(
            model=variant,
            traffic_intensity=0.0,
            service_level=1.0,
            asa_seconds=0.0,
            occupancy=0.0,
            actual_occupancy=0.0,
            effective_agents=actual,
            actual_agents=actual,
            total_fte=total_fte,
            occupancy_cap_applied=False,
            required_agents_for_max_occupancy=0,
            blocking_probability=0.0 if variant == "B" else None,
            abandonment_rate=0.0 if variant == "A" else None,
            expected_abandonments=0.0 if variant == "A" else None,
            answered_contacts=max(float(workload.volume), 0.0) if variant == "A" else None,
        )

    required_for_cap = agents_for_occupancy(a, cap)
    effective, penalty = effective_agents_under_cap(actual, required_for_cap)
    cap_applied = effective < actual
    if cap_applied:
        logger.debug(
            "Occupancy cap %.2f needs %d agents, have %d; projecting on %d effective agents",
            cap,
            required_for_cap,
            actual,
            effective,
        )

    proj = project_load(variant, effective, a, aht, constraints.threshold_seconds, patience)
    if proj is None:
        return None

    naive_occ = occupancy(a, actual)
    reported_occ = min(naive_occ, cap) if cap_applied else proj.occupancy

    abandons: Optional[float] = None
    answered: Optional[float] = None
    if variant == "A":
        abandons = expected_abandonments(workload.volume, effective, a, patience_ratio(float(patience or 0.0), aht))
        answered = float(workload.volume) - abandons

    return AchievableMetrics(
        model=variant,
        traffic_intensity=float(a),
        service_level=proj.service_level,
        asa_seconds=proj.asa_seconds,
        occupancy=reported_occ,
        actual_occupancy=naive_occ,
        effective_agents=effective,
        actual_agents=actual,
        total_fte=total_fte,
        occupancy_cap_applied=cap_applied,
        occupancy_penalty=penalty if cap_applied else None,
        required_agents_for_max_occupancy=required_for_cap,
        blocking_probability=proj.blocking_probability,
        abandonment_rate=proj.abandonment_rate,
        expected_abandonments=abandons,
        answered_contacts=answered,
    )


def achievable_to_dict(result: AchievableMetrics) -> Dict[str, Any]:
    return {
        "model": result.model,
        "erlangs": result.traffic_intensity,
        "actual_agents": result.actual_agents,
        "effective_agents": result.effective_agents,
        "total_fte": result.total_fte,
        "service_level": result.service_level,
        "asa_seconds": result.asa_seconds,
        "occupancy": result.occupancy,
        "actual_occupancy": result.actual_occupancy,
        "occupancy_cap_applied": result.occupancy_cap_applied,
        "occupancy_penalty": result.occupancy_penalty,
        "required_agents_for_max_occupancy": result.required_agents_for_max_occupancy,
        "occupancy_shortfall": result.occupancy_shortfall,
        "blocking_probability": result.blocking_probability,
        "abandonment_rate": result.abandonment_rate,
    }


__all__ = [
    "AchievableMetrics",
    "effective_agents_under_cap",
    "calculate_achievable_metrics",
    "achievable_to_dict",
]
