# src/erlang_engine/validation.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .inputs import Behavior, Constraints, WorkloadInput
from .projector import normalize_model


# -----------------------------
# Field-level checks (advisory)
# -----------------------------
VOLUME_MAX = 100_000
AHT_RANGE = (1.0, 7200.0)
THRESHOLD_RANGE = (1.0, 600.0)
MAX_OCCUPANCY_MIN = 0.50
PATIENCE_RANGE = (10.0, 1800.0)
INTERVAL_MAX_MINUTES = 60


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error_for(self, field_name: str) -> Optional[str]:
        for e in self.errors:
            if e.field == field_name:
                return e.message
        return None


def validate_calculation_inputs(
    workload: WorkloadInput,
    constraints: Constraints,
    behavior: Behavior,
    model: str = "C",
) -> ValidationResult:
    """
    Checks inputs against the ranges a planner would plausibly enter.
    The calculators accept anything; this is for surfacing mistakes.
    """
    errors: List[FieldError] = []

    def err(name: str, message: str) -> None:
        errors.append(FieldError(name, message))

    if workload.volume < 0:
        err("volume", "Volume cannot be negative")
    if workload.volume > VOLUME_MAX:
        err("volume", f"Volume cannot exceed {VOLUME_MAX:,}")

    if workload.aht_seconds < AHT_RANGE[0]:
        err("aht_seconds", "AHT must be at least 1 second")
    if workload.aht_seconds > AHT_RANGE[1]:
        err("aht_seconds", "AHT cannot exceed 2 hours (7200 seconds)")

    if workload.interval_minutes <= 0:
        err("interval_minutes", "Interval must be positive")
    if workload.interval_minutes > INTERVAL_MAX_MINUTES:
        err("interval_minutes", "Interval cannot exceed 60 minutes")

    if constraints.target_service_level < 0:
        err("target_service_level", "Service level cannot be negative")
    if constraints.target > 1.0:
        err("target_service_level", "Service level cannot exceed 100%")

    if constraints.threshold_seconds < THRESHOLD_RANGE[0]:
        err("threshold_seconds", "Threshold must be at least 1 second")
    if constraints.threshold_seconds > THRESHOLD_RANGE[1]:
        err("threshold_seconds", "Threshold cannot exceed 10 minutes (600 seconds)")

    if constraints.occupancy_cap < MAX_OCCUPANCY_MIN:
        err("max_occupancy", "Max occupancy must be at least 50%")
    if constraints.occupancy_cap > 1.0:
        err("max_occupancy", "Max occupancy cannot exceed 100%")

    if behavior.shrinkage < 0:
        err("shrinkage", "Shrinkage cannot be negative")
    if behavior.shrinkage_fraction >= 1.0:
        err("shrinkage", "Shrinkage cannot be 100% (infinite FTE required)")

    if int(behavior.concurrency) < 1:
        err("concurrency", "Concurrency must be at least 1")

    if normalize_model(model) == "A":
        patience = behavior.average_patience_seconds
        if patience is None or patience <= 0:
            err("average_patience_seconds", "Erlang A needs an average patience")
        elif patience < PATIENCE_RANGE[0]:
            err("average_patience_seconds", "Average patience must be at least 10 seconds")
        elif patience > PATIENCE_RANGE[1]:
            err("average_patience_seconds", "Average patience cannot exceed 30 minutes")

    return ValidationResult(errors=errors)


# -----------------------------
# Interval tables
# -----------------------------
REQUIRED_INTERVAL_COLUMNS = {"interval_start", "interval_minutes", "volume", "aht_seconds", "is_open"}


def open_mask(is_open: pd.Series) -> pd.Series:
    """Normalize is_open (bools, 0/1, or "true"/"yes" strings) to bool."""
    if pd.api.types.is_bool_dtype(is_open) or pd.api.types.is_numeric_dtype(is_open):
        return is_open.fillna(0).astype(int).astype(bool)
    return is_open.astype(str).str.strip().str.lower().isin(["1", "true", "t", "yes", "y"])


def validate_interval_df(df: pd.DataFrame) -> None:
    missing = REQUIRED_INTERVAL_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(
            f"Interval dataframe missing required columns: {sorted(missing)}. "
            f"Expected: {sorted(REQUIRED_INTERVAL_COLUMNS)}"
        )

    if df.empty:
        raise ValueError("Interval dataframe is empty")

    if pd.to_numeric(df["interval_minutes"], errors="coerce").isna().any():
        raise ValueError("interval_minutes must be numeric")

    if pd.to_numeric(df["volume"], errors="coerce").isna().any():
        raise ValueError("volume must be numeric")

    if pd.to_numeric(df["aht_seconds"], errors="coerce").isna().any():
        raise ValueError("aht_seconds must be numeric")

    # ensure interval_start is parseable
    parsed = pd.to_datetime(df["interval_start"], errors="coerce")
    if parsed.isna().any():
        bad = df.index[parsed.isna()].tolist()[:10]
        raise ValueError(f"interval_start has invalid timestamps. Example bad rows: {bad}")


def validate_intervals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Returns a copy of the interval table with boolean flag columns.
    Flagged rows are still computable (they count as no load); the flags
    tell the planner which inputs look wrong.
    """
    validate_interval_df(df)

    out = df.copy()
    volume = pd.to_numeric(out["volume"], errors="coerce")
    aht = pd.to_numeric(out["aht_seconds"], errors="coerce")
    minutes = pd.to_numeric(out["interval_minutes"], errors="coerce")
    is_open = open_mask(out["is_open"])

    out["flag_volume_negative"] = volume < 0
    out["flag_aht_nonpositive"] = aht <= 0
    out["flag_interval_nonpositive"] = minutes <= 0
    out["flag_open_with_zero_volume"] = is_open & (volume == 0)
    return out


__all__ = [
    "FieldError",
    "ValidationResult",
    "validate_calculation_inputs",
    "REQUIRED_INTERVAL_COLUMNS",
    "open_mask",
    "validate_interval_df",
    "validate_intervals",
]
