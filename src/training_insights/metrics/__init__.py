"""Training metrics calculations."""

from .physiology import (
    TrainingPaces,
    calculate_hrtss,
    calculate_trimp,
    calculate_vdot,
    estimate_vo2max_from_hr,
    get_training_paces,
    predict_from_vdot,
    riegel_prediction,
)
from .fitness import (
    FitnessPoint,
    build_fitness_history,
    calculate_atl,
    calculate_ctl,
    calculate_tsb,
    current_fitness,
)
from .efforts import (
    # Best efforts and VDOT
    DISTANCE_RANGES,
    BestEffort,
    DistanceRange,
    RangedEffort,
    WeightedVDOT,
    calculate_weighted_vdot,
    find_best_efforts,
    get_best_efforts_by_distance,
    # Personal records
    PR_DISTANCES,
    PR_TOLERANCES,
    PersonalRecord,
    find_personal_records,
)
from .predictions import (
    RACE_DISTANCES,
    PredictionAdjustment,
    RacePredictions,
    TrainingContext,
    analyze_training_context,
    calculate_adjustment_factors,
    calculate_weighted_predictions,
)
from .injury import InjuryRisk, RiskLevel, calculate_acwr, classify_acwr
from .efficiency import (
    EfficiencyPoint,
    EfficiencyTrend,
    PaceHRPoint,
    calculate_aerobic_efficiency,
    get_efficiency_trend,
    pace_hr_points,
    pace_hr_trend,
)
from .distribution import (
    TrainingBalance,
    TrainingDistribution,
    WeeklyZoneDistribution,
    analyze_training_distribution,
    estimate_max_hr,
    training_balance,
    weekly_zone_distribution,
)
from .consistency import StreakData, calculate_streaks

__all__ = [
    # Physiology
    "TrainingPaces",
    "calculate_hrtss",
    "calculate_trimp",
    "calculate_vdot",
    "estimate_vo2max_from_hr",
    "get_training_paces",
    "predict_from_vdot",
    "riegel_prediction",
    # Fitness model
    "FitnessPoint",
    "build_fitness_history",
    "calculate_atl",
    "calculate_ctl",
    "calculate_tsb",
    "current_fitness",
    # Best efforts
    "DISTANCE_RANGES",
    "BestEffort",
    "DistanceRange",
    "RangedEffort",
    "WeightedVDOT",
    "calculate_weighted_vdot",
    "find_best_efforts",
    "get_best_efforts_by_distance",
    "PR_DISTANCES",
    "PR_TOLERANCES",
    "PersonalRecord",
    "find_personal_records",
    # Predictions
    "RACE_DISTANCES",
    "PredictionAdjustment",
    "RacePredictions",
    "TrainingContext",
    "analyze_training_context",
    "calculate_adjustment_factors",
    "calculate_weighted_predictions",
    # Injury risk
    "InjuryRisk",
    "RiskLevel",
    "calculate_acwr",
    "classify_acwr",
    # Efficiency
    "EfficiencyPoint",
    "EfficiencyTrend",
    "PaceHRPoint",
    "calculate_aerobic_efficiency",
    "get_efficiency_trend",
    "pace_hr_points",
    "pace_hr_trend",
    # Distribution
    "TrainingBalance",
    "TrainingDistribution",
    "WeeklyZoneDistribution",
    "analyze_training_distribution",
    "estimate_max_hr",
    "weekly_zone_distribution",
    # Consistency
    "StreakData",
    "calculate_streaks",
]
