# src/erlang_engine/__init__.py
from __future__ import annotations

# -----------------------------
# Inputs + traffic
# -----------------------------
from .inputs import (
    WorkloadInput,
    Constraints,
    Behavior,
    as_fraction,
)

from .traffic import (
    traffic_intensity,
    interval_seconds,
)

# -----------------------------
# Erlang B / C / A
# -----------------------------
from .erlangb import (
    erlang_b,
    carried_traffic,
    required_lines,
)

from .erlangc import (
    erlang_c,
    probability_wait_exceeds,
    service_level_erlang_c,
    asa_erlang_c,
    occupancy,
)

from .erlanga import (
    abandonment_probability,
    probability_wait_exceeds_erlang_a,
    service_level_erlang_a,
    asa_erlang_a,
    expected_abandonments,
)

# -----------------------------
# Projection, search, shrinkage
# -----------------------------
from .projector import (
    ErlangVariant,
    Projection,
    normalize_model,
    project,
    project_load,
)

from .search import (
    SearchConfig,
    solve_agents,
)

from .shrinkage import (
    fte,
    scheduled_agents,
)

# -----------------------------
# Forward / reverse entry points
# -----------------------------
from .staffing import (
    StaffingMetrics,
    calculate_staffing_metrics,
    metrics_to_dict,
)

from .achievable import (
    AchievableMetrics,
    calculate_achievable_metrics,
    achievable_to_dict,
)

# -----------------------------
# Config, validation, tables
# -----------------------------
from .config import (
    EngineSettings,
    load_settings_from_env,
    configure_logging,
)

from .validation import (
    ValidationResult,
    validate_calculation_inputs,
    validate_intervals,
)

from .table import (
    staffing_table,
    summarize_table,
    compare_models,
    service_level_curve,
)

__all__ = [
    # Inputs
    "WorkloadInput",
    "Constraints",
    "Behavior",
    "as_fraction",
    "traffic_intensity",
    "interval_seconds",
    # Erlang models
    "erlang_b",
    "carried_traffic",
    "required_lines",
    "erlang_c",
    "probability_wait_exceeds",
    "service_level_erlang_c",
    "asa_erlang_c",
    "occupancy",
    "abandonment_probability",
    "probability_wait_exceeds_erlang_a",
    "service_level_erlang_a",
    "asa_erlang_a",
    "expected_abandonments",
    # Projection / search
    "ErlangVariant",
    "Projection",
    "normalize_model",
    "project",
    "project_load",
    "SearchConfig",
    "solve_agents",
    "fte",
    "scheduled_agents",
    # Entry points
    "StaffingMetrics",
    "calculate_staffing_metrics",
    "metrics_to_dict",
    "AchievableMetrics",
    "calculate_achievable_metrics",
    "achievable_to_dict",
    # Config / validation / tables
    "EngineSettings",
    "load_settings_from_env",
    "configure_logging",
    "ValidationResult",
    "validate_calculation_inputs",
    "validate_intervals",
    "staffing_table",
    "summarize_table",
    "compare_models",
    "service_level_curve",
]
