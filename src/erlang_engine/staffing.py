# src/erlang_engine/staffing.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .erlanga import expected_abandonments, has_patience, patience_ratio
from .inputs import Behavior, Constraints, WorkloadInput, check_behavior, check_constraints
from .projector import ErlangVariant, normalize_model, project_load
from .search import SearchConfig, solve_agents
from .shrinkage import fte

logger = logging.getLogger(__name__)


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class StaffingMetrics:
    model: ErlangVariant
    traffic_intensity: float
    required_agents: int
    total_fte: float
    service_level: float
    asa_seconds: float
    occupancy: float
    can_achieve_target: bool

    # Model-specific extras
    blocking_probability: Optional[float] = None
    abandonment_rate: Optional[float] = None
    expected_abandonments: Optional[float] = None
    answered_contacts: Optional[float] = None


# -----------------------------
# Internal helpers
# -----------------------------
def _no_load(model: ErlangVariant, traffic: float, volume: float) -> StaffingMetrics:
    return StaffingMetrics(
        model=model,
        traffic_intensity=traffic,
        required_agents=0,
        total_fte=0.0,
        service_level=1.0,
        asa_seconds=0.0,
        occupancy=0.0,
        can_achieve_target=True,
        blocking_probability=0.0 if model == "B" else None,
        abandonment_rate=0.0 if model == "A" else None,
        expected_abandonments=0.0 if model == "A" else None,
        answered_contacts=max(float(volume), 0.0) if model == "A" else None,
    )


def _infeasible(model: ErlangVariant, traffic: float) -> StaffingMetrics:
    return StaffingMetrics(
        model=model,
        traffic_intensity=traffic,
        required_agents=0,
        total_fte=0.0,
        service_level=0.0,
        asa_seconds=math.inf,
        occupancy=0.0,
        can_achieve_target=False,
    )


# -----------------------------
# Public API
# -----------------------------
def calculate_staffing_metrics(
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
    model: str = "C",
    *,
    search: Optional[SearchConfig] = None,
) -> Optional[StaffingMetrics]:
    """
    Forward solve: minimum agents meeting the service-level target under the
    occupancy cap, converted to FTE with shrinkage.

    Returns None only when the model needs a parameter that is missing
    (Erlang A without patience). An unreachable target comes back as
    required_agents=0, can_achieve_target=False, asa=inf.
    """
    check_constraints(constraints)
    check_behavior(behavior)

    variant = normalize_model(model)
    patience = behavior.average_patience_seconds
    if variant == "A" and not has_patience(patience):
        logger.warning("Erlang A needs a positive average patience; no staffing computed")
        return None

    aht = workload.effective_aht(behavior.concurrency)
    a = workload.traffic(behavior.concurrency)

    if a <= 0:
        return _no_load(variant, a, workload.volume)

    n = solve_agents(
        a,
        aht,
        constraints.target,
        constraints.threshold_seconds,
        constraints.occupancy_cap,
        model=variant,
        average_patience_seconds=patience,
        search=search,
    )
    if n is None:
        return _infeasible(variant, a)

    proj = project_load(variant, n, a, aht, constraints.threshold_seconds, patience)
    if proj is None:
        return None

    abandons: Optional[float] = None
    answered: Optional[float] = None
    if variant == "A":
        abandons = expected_abandonments(workload.volume, n, a, patience_ratio(float(patience or 0.0), aht))
        answered = float(workload.volume) - abandons

    return StaffingMetrics(
        model=variant,
        traffic_intensity=float(a),
        required_agents=int(n),
        total_fte=fte(n, behavior.shrinkage_fraction),
        service_level=proj.service_level,
        asa_seconds=proj.asa_seconds,
        occupancy=proj.occupancy,
        can_achieve_target=proj.service_level >= constraints.target,
        blocking_probability=proj.blocking_probability,
        abandonment_rate=proj.abandonment_rate,
        expected_abandonments=abandons,
        answered_contacts=answered,
    )


def metrics_to_dict(result: StaffingMetrics) -> Dict[str, Any]:
    return {
        "model": result.model,
        "erlangs": result.traffic_intensity,
        "required_agents": result.required_agents,
        "total_fte": result.total_fte,
        "service_level": result.service_level,
        "asa_seconds": result.asa_seconds,
        "occupancy": result.occupancy,
        "can_achieve_target": result.can_achieve_target,
        "blocking_probability": result.blocking_probability,
        "abandonment_rate": result.abandonment_rate,
        "expected_abandonments": result.expected_abandonments,
        "answered_contacts": result.answered_contacts,
    }


__all__ = [
    "StaffingMetrics",
    "calculate_staffing_metrics",
    "metrics_to_dict",
]
