"""
Race time predictions.

Predictions blend two estimators over the best effort of each distance range:
- Riegel extrapolation from every effort, weighted by range reliability
- Daniels VDOT prediction from the weighted mean VDOT

The blend is then corrected by the athlete's recent training context
(freshness, volume, long runs and frequency). The correction thresholds are
empirical, calibrated to match common training-watch predictions.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from ..models.activity import ActivityRecord
from .efforts import BestEffort, get_best_efforts_by_distance
from .physiology import (
    DEFAULT_RIEGEL_EXPONENT,
    calculate_vdot,
    predict_from_vdot,
    riegel_prediction,
)


RACE_DISTANCES: Mapping[str, float] = MappingProxyType({
    "5K": 5000,
    "10K": 10000,
    "Half Marathon": 21097.5,
    "Marathon": 42195,
})

# Blend weights: VDOT runs more optimistic than Riegel for trained runners
VDOT_BLEND_WEIGHT = 0.6
RIEGEL_BLEND_WEIGHT = 0.4

VOLUME_WINDOW_DAYS = 28
LONG_RUN_WINDOW_DAYS = 21
WEEKS_IN_VOLUME_WINDOW = 4

HALF_MARATHON_THRESHOLD = 21097
MARATHON_THRESHOLD = 42195


@dataclass(frozen=True)
class TrainingContext:
    """Snapshot of recent training used to adjust predictions."""

    tsb: float  # positive = fresh, negative = fatigued
    weekly_volume: float  # meters per week, 4 week average
    longest_recent_run: float  # meters, last 3 weeks
    runs_per_week: float  # 4 week average

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "tsb": self.tsb,
            "weeklyVolume": round(self.weekly_volume),
            "longestRecentRun": round(self.longest_recent_run),
            "runsPerWeek": round(self.runs_per_week, 1),
        }


@dataclass(frozen=True)
class PredictionAdjustment:
    """Multiplicative correction for one race (< 1 is faster, > 1 slower)."""

    factor: float = 1.0
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "factor": round(self.factor, 4),
            "reasons": list(self.reasons),
        }


@dataclass(frozen=True)
class RacePredictions:
    """Predicted race times in seconds plus the adjustments applied."""

    predictions: Dict[str, int] = field(default_factory=dict)
    adjustments: Dict[str, PredictionAdjustment] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "predictions": dict(self.predictions),
            "adjustments": {
                name: adjustment.to_dict()
                for name, adjustment in self.adjustments.items()
            },
        }


def analyze_training_context(
    activities: Sequence[ActivityRecord],
    current_tsb: float,
    now: Optional[datetime] = None,
) -> TrainingContext:
    """
    Summarize recent running for the prediction adjuster.

    Volume and frequency average runs of the last 28 days over 4 weeks; the
    longest run looks at the last 21 days.

    Args:
        activities: Activity history
        current_tsb: Current Training Stress Balance
        now: Reference time (default: now)

    Returns:
        TrainingContext
    """
    now = now or datetime.now()
    four_weeks_ago = now - timedelta(days=VOLUME_WINDOW_DAYS)
    three_weeks_ago = now - timedelta(days=LONG_RUN_WINDOW_DAYS)

    runs = [a for a in activities if a.is_run]
    last_four_weeks = [a for a in runs if a.start_date >= four_weeks_ago]
    last_three_weeks = [a for a in runs if a.start_date >= three_weeks_ago]

    total_distance = sum(a.distance for a in last_four_weeks)
    longest = max((a.distance for a in last_three_weeks), default=0.0)

    return TrainingContext(
        tsb=current_tsb,
        weekly_volume=total_distance / WEEKS_IN_VOLUME_WINDOW,
        longest_recent_run=longest,
        runs_per_week=len(last_four_weeks) / WEEKS_IN_VOLUME_WINDOW,
    )


def _race_adjustment(race_distance: float, context: TrainingContext) -> PredictionAdjustment:
    factor = 1.0
    reasons: List[str] = []

    # Freshness
    if context.tsb > 15:
        factor *= 0.98
        reasons.append("Ready to race (+2%)")
    elif context.tsb > 5:
        factor *= 0.99
        reasons.append("Good form (+1%)")
    elif context.tsb < -25:
        factor *= 1.015
        reasons.append("Somewhat fatigued (-1.5%)")

    # Volume
    weekly_km = context.weekly_volume / 1000

    if race_distance >= HALF_MARATHON_THRESHOLD:
        if weekly_km < 20:
            factor *= 1.02
            reasons.append("Low volume (-2%)")
        elif weekly_km >= 50:
            factor *= 0.98
            reasons.append("Good volume (+2%)")

    if race_distance >= MARATHON_THRESHOLD:
        if weekly_km < 40:
            factor *= 1.02
            reasons.append("Marathon prep improvable (-2%)")
        elif weekly_km >= 70:
            factor *= 0.97
            reasons.append("Excellent marathon prep (+3%)")

    # Long runs
    longest_km = context.longest_recent_run / 1000

    if race_distance >= HALF_MARATHON_THRESHOLD:
        if longest_km < 12:
            factor *= 1.02
            reasons.append("Long runs recommended (-2%)")
        elif longest_km >= 16:
            factor *= 0.99
            reasons.append("Good long runs (+1%)")

    if race_distance >= MARATHON_THRESHOLD:
        if longest_km < 20:
            factor *= 1.03
            reasons.append("Need 20km+ long runs (-3%)")
        elif longest_km >= 28:
            factor *= 0.98
            reasons.append("Optimal long runs (+2%)")

    # Consistency (bonus only)
    if context.runs_per_week >= 5:
        factor *= 0.99
        reasons.append("Good consistency (+1%)")
    elif context.runs_per_week >= 4:
        factor *= 0.995
        reasons.append("Consistent (+0.5%)")

    return PredictionAdjustment(factor=factor, reasons=reasons)


def calculate_adjustment_factors(context: TrainingContext) -> Dict[str, PredictionAdjustment]:
    """
    Adjustment factor for every race distance from the training context.

    Every rule that fires multiplies the factor and appends a reason; rules
    compound. Volume and long-run rules only apply from the half marathon up.
    """
    return {
        name: _race_adjustment(distance, context)
        for name, distance in RACE_DISTANCES.items()
    }


def calculate_weighted_predictions(
    efforts: Sequence[BestEffort],
    training_context: Optional[TrainingContext] = None,
) -> RacePredictions:
    """
    Predict race times from the best effort of each distance range.

    For every race distance:
    1. Riegel estimate from each ranged effort, averaged by range weight
    2. VDOT estimate from the weighted mean VDOT
    3. Blend 60% VDOT + 40% Riegel, rounded to whole seconds
    4. Multiply by the training context adjustment, when a context is given

    Args:
        efforts: Best efforts (ungrouped)
        training_context: Recent training snapshot

    Returns:
        RacePredictions, empty when no effort falls in a distance range
    """
    ranged = get_best_efforts_by_distance(efforts)
    if not ranged:
        return RacePredictions()

    total_weight = 0.0
    weighted_vdot = 0.0
    riegel_sums = {name: 0.0 for name in RACE_DISTANCES}

    for effort in ranged:
        weight = effort.range_weight
        total_weight += weight
        weighted_vdot += calculate_vdot(effort.distance, effort.time) * weight

        for name, target in RACE_DISTANCES.items():
            predicted = riegel_prediction(
                effort.time, effort.distance, target, DEFAULT_RIEGEL_EXPONENT
            )
            riegel_sums[name] += predicted * weight

    avg_vdot = weighted_vdot / total_weight

    predictions: Dict[str, int] = {}
    for name, target in RACE_DISTANCES.items():
        riegel_estimate = riegel_sums[name] / total_weight
        vdot_estimate = predict_from_vdot(avg_vdot, target)
        predictions[name] = round(
            vdot_estimate * VDOT_BLEND_WEIGHT + riegel_estimate * RIEGEL_BLEND_WEIGHT
        )

    adjustments: Dict[str, PredictionAdjustment] = {}
    if training_context is not None:
        adjustments = calculate_adjustment_factors(training_context)
        for name, adjustment in adjustments.items():
            if predictions.get(name):
                predictions[name] = round(predictions[name] * adjustment.factor)

    return RacePredictions(predictions=predictions, adjustments=adjustments)
