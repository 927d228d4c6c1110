"""Recovery engine: workload, recovery, readiness, consistency, imbalance."""

from fitrecovery.engine.consistency import (
    ConsistencyConfig,
    calculate_consistency,
    calculate_consistency_score,
)
from fitrecovery.engine.imbalance import ImbalanceConfig, detect_imbalances
from fitrecovery.engine.readiness import (
    ReadinessConfig,
    calculate_overall_recovery_score,
    calculate_recovery_trend,
    calculate_recovery_trend_data,
    compute_readiness,
    generate_recovery_insights,
    top_muscles_by_status,
)
from fitrecovery.engine.recovery import (
    calculate_muscle_status,
    calculate_recovery_percentage,
    compute_muscle_statuses,
)
from fitrecovery.engine.report import compute_recovery_report
from fitrecovery.engine.workload import (
    aggregate_muscle_volume,
    calculate_workload_score,
    compute_muscle_workloads,
    compute_set_volume,
)

__all__ = [
    "ConsistencyConfig",
    "calculate_consistency",
    "calculate_consistency_score",
    "ImbalanceConfig",
    "detect_imbalances",
    "ReadinessConfig",
    "calculate_overall_recovery_score",
    "calculate_recovery_trend",
    "calculate_recovery_trend_data",
    "compute_readiness",
    "generate_recovery_insights",
    "top_muscles_by_status",
    "calculate_muscle_status",
    "calculate_recovery_percentage",
    "compute_muscle_statuses",
    "compute_recovery_report",
    "aggregate_muscle_volume",
    "calculate_workload_score",
    "compute_muscle_workloads",
    "compute_set_volume",
]
