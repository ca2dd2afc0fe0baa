# src/erlang_engine/table.py
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, Optional

import numpy as np
import pandas as pd

from .config import EngineSettings
from .inputs import Behavior, Constraints, WorkloadInput, check_constraints
from .projector import MODELS, normalize_model, project
from .search import lower_bound
from .shrinkage import scheduled_agents
from .staffing import StaffingMetrics, calculate_staffing_metrics, metrics_to_dict
from .validation import open_mask

logger = logging.getLogger(__name__)

_TABLE_COLUMNS = {"volume", "aht_seconds"}

RESULT_COLUMNS = [
    "erlangs",
    "required_agents",
    "total_fte",
    "required_scheduled",
    "service_level",
    "asa_seconds",
    "occupancy",
    "can_achieve_target",
    "abandonment_rate",
    "blocking_probability",
]


# -----------------------------
# Interval staffing table
# -----------------------------
def _row_result(metrics: Optional[StaffingMetrics], shrinkage: float) -> Dict[str, Any]:
    if metrics is None:
        return {c: np.nan for c in RESULT_COLUMNS}

    return {
        "erlangs": metrics.traffic_intensity,
        "required_agents": metrics.required_agents,
        "total_fte": metrics.total_fte,
        "required_scheduled": scheduled_agents(metrics.required_agents, shrinkage),
        "service_level": metrics.service_level,
        "asa_seconds": metrics.asa_seconds,
        "occupancy": metrics.occupancy,
        "can_achieve_target": metrics.can_achieve_target,
        "abandonment_rate": metrics.abandonment_rate,
        "blocking_probability": metrics.blocking_probability,
    }


def staffing_table(
    interval_df: pd.DataFrame,
    constraints: Constraints,
    behavior: Behavior,
    model: str = "C",
    *,
    settings: Optional[EngineSettings] = None,
) -> pd.DataFrame:
    """
    Runs the forward solve for every interval row.

    Required columns: volume, aht_seconds.
    Optional: interval_minutes (defaults from settings), is_open (defaults to open),
    interval_start (kept and used for ordering).

    Closed intervals get zero staffing. Unstable/infeasible rows keep asa=inf.
    """
    missing = _TABLE_COLUMNS - set(interval_df.columns)
    if missing:
        raise ValueError(f"Interval dataframe missing required columns: {sorted(missing)}")
    check_constraints(constraints)

    cfg = settings or EngineSettings()
    variant = normalize_model(model)

    df = interval_df.copy().reset_index(drop=True)
    if "interval_minutes" not in df.columns:
        df["interval_minutes"] = cfg.default_interval_minutes
    df["interval_minutes"] = pd.to_numeric(df["interval_minutes"], errors="coerce").fillna(cfg.default_interval_minutes)
    df["volume"] = pd.to_numeric(df["volume"], errors="coerce").fillna(0.0).astype(float)
    df["aht_seconds"] = pd.to_numeric(df["aht_seconds"], errors="coerce").fillna(0.0).astype(float)
    df["is_open"] = open_mask(df["is_open"]) if "is_open" in df.columns else True

    shrinkage = behavior.shrinkage_fraction
    rows: list[Dict[str, Any]] = []
    for _, r in df.iterrows():
        workload = WorkloadInput(
            volume=float(r["volume"]) if bool(r["is_open"]) else 0.0,
            aht_seconds=float(r["aht_seconds"]),
            interval_minutes=float(r["interval_minutes"]),
        )
        metrics = calculate_staffing_metrics(workload, constraints, behavior, variant, search=cfg.search)
        rows.append(_row_result(metrics, shrinkage))

    out = pd.concat([df, pd.DataFrame(rows, columns=RESULT_COLUMNS)], axis=1)
    if "interval_start" in out.columns:
        out = out.sort_values("interval_start", kind="stable").reset_index(drop=True)

    infeasible = int(out["can_achieve_target"].eq(False).sum())
    if infeasible:
        logger.info("%d of %d intervals cannot reach the target", infeasible, len(out))
    return out


def summarize_table(table: pd.DataFrame) -> Dict[str, float]:
    """
    Totals for a staffing table. ASA is volume-weighted over intervals with a
    finite ASA only; inf marks an unstable interval, not a number.
    """
    asa = pd.to_numeric(table["asa_seconds"], errors="coerce").to_numpy(dtype=float)
    volume = pd.to_numeric(table["volume"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
    finite = np.isfinite(asa) & (volume > 0)

    weighted_asa = float(np.average(asa[finite], weights=volume[finite])) if finite.any() else math.nan

    return {
        "intervals": float(len(table)),
        "infeasible_intervals": float(table["can_achieve_target"].eq(False).sum()),
        "total_volume": float(volume.sum()),
        "peak_required_agents": float(pd.to_numeric(table["required_agents"], errors="coerce").max()),
        "total_fte": float(pd.to_numeric(table["total_fte"], errors="coerce").replace(np.inf, np.nan).sum()),
        "weighted_asa_seconds": weighted_asa,
    }


# -----------------------------
# Model comparison
# -----------------------------
def compare_models(
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
    models: Iterable[str] = MODELS,
) -> pd.DataFrame:
    """One row per model; Erlang A without patience yields a row of NaN."""
    rows: list[Dict[str, Any]] = []
    for m in models:
        variant = normalize_model(m)
        metrics = calculate_staffing_metrics(workload, constraints, behavior, variant)
        if metrics is None:
            row: Dict[str, Any] = {"model": variant}
        else:
            row = metrics_to_dict(metrics)
        rows.append(row)
    return pd.DataFrame(rows).set_index("model")


# -----------------------------
# Service level curve
# -----------------------------
def service_level_curve(
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
    model: str = "C",
    agents: Optional[Iterable[int]] = None,
    *,
    settings: Optional[EngineSettings] = None,
) -> pd.DataFrame:
    """
    Service level, ASA and occupancy across a range of agent counts.
    Default range: from the stability floor to the search ceiling.
    """
    check_constraints(constraints)
    variant = normalize_model(model)
    cfg = settings or EngineSettings()

    if agents is None:
        a = workload.traffic(behavior.concurrency)
        low = lower_bound(variant, a, 1.0)
        high = cfg.search.ceiling(a, low)
        counts = np.arange(low, high + 1, dtype=int)
    else:
        counts = np.asarray(list(agents), dtype=int)

    rows: list[Dict[str, Any]] = []
    for n in counts:
        proj = project(variant, int(n), workload, constraints, behavior)
        if proj is None:
            return pd.DataFrame(columns=["agents", "service_level", "asa_seconds", "occupancy", "meets_target"])
        rows.append(
            {
                "agents": int(n),
                "service_level": proj.service_level,
                "asa_seconds": proj.asa_seconds,
                "occupancy": proj.occupancy,
                "meets_target": proj.service_level >= constraints.target,
            }
        )
    return pd.DataFrame(rows)


__all__ = [
    "RESULT_COLUMNS",
    "staffing_table",
    "summarize_table",
    "compare_models",
    "service_level_curve",
]
