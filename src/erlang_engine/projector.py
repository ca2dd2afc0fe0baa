# src/erlang_engine/projector.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, TypeAlias

from .erlanga import (
    abandonment_probability,
    asa_erlang_a,
    has_patience,
    patience_ratio,
    service_level_erlang_a,
)
from .erlangb import carried_traffic, erlang_b
from .erlangc import asa_erlang_c, clamp01, occupancy, service_level_erlang_c
from .inputs import Behavior, Constraints, WorkloadInput

logger = logging.getLogger(__name__)

ErlangVariant: TypeAlias = Literal["B", "C", "A"]
MODELS: tuple[ErlangVariant, ...] = ("B", "C", "A")


def normalize_model(model: str) -> ErlangVariant:
    """
    Maps loose model names onto a variant:
      "erlangB" / "b"            -> "B"
      "erlangA" / "a" / "erlangX" / "x" -> "A"
      anything else              -> "C"
    """
    m = str(model).strip().lower()
    if "erlangb" in m or m == "b":
        return "B"
    if "erlanga" in m or m == "a":
        return "A"
    if "erlangx" in m or m == "x":
        return "A"
    return "C"


def requires_patience(model: str) -> bool:
    return normalize_model(model) == "A"


@dataclass(frozen=True)
class Projection:
    """Performance of a given agent count under one model."""
    service_level: float
    asa_seconds: float
    occupancy: float
    blocking_probability: Optional[float] = None
    abandonment_rate: Optional[float] = None


def project_load(
    model: ErlangVariant,
    agents: float,
    traffic: float,
    aht_seconds: float,
    threshold_seconds: float,
    average_patience_seconds: Optional[float] = None,
) -> Optional[Projection]:
    """
    Projects service level, ASA and occupancy for `agents` serving `traffic` Erlangs.
    Erlang B reports 1 - blocking as its service level and has no queue (ASA = 0).
    Returns None for Erlang A without patience.
    """
    if model == "B":
        blocking = erlang_b(agents, traffic)
        occ = clamp01(carried_traffic(agents, traffic) / agents) if agents > 0 else 0.0
        return Projection(
            service_level=clamp01(1.0 - blocking),
            asa_seconds=0.0,
            occupancy=occ,
            blocking_probability=blocking,
        )

    if model == "A":
        if not has_patience(average_patience_seconds):
            return None
        patience = float(average_patience_seconds or 0.0)
        return Projection(
            service_level=service_level_erlang_a(agents, traffic, aht_seconds, threshold_seconds, patience),
            asa_seconds=asa_erlang_a(agents, traffic, aht_seconds, patience),
            occupancy=occupancy(traffic, agents),
            abandonment_rate=abandonment_probability(agents, traffic, patience_ratio(patience, aht_seconds)),
        )

    return Projection(
        service_level=service_level_erlang_c(agents, traffic, aht_seconds, threshold_seconds),
        asa_seconds=asa_erlang_c(agents, traffic, aht_seconds),
        occupancy=occupancy(traffic, agents),
    )


def project(
    model: str,
    agents: float,
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
) -> Optional[Projection]:
    variant = normalize_model(model)
    if variant == "A" and not has_patience(behavior.average_patience_seconds):
        logger.warning("Erlang A projection requested without a positive average patience")
        return None

    return project_load(
        variant,
        agents,
        workload.traffic(behavior.concurrency),
        workload.effective_aht(behavior.concurrency),
        constraints.threshold_seconds,
        behavior.average_patience_seconds,
    )


__all__ = [
    "ErlangVariant",
    "MODELS",
    "normalize_model",
    "requires_patience",
    "Projection",
    "project_load",
    "project",
]
