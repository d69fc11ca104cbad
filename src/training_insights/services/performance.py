"""
Performance report service.

Assembles the dashboard payloads from an activity history and the athlete's
heart rate zones:
- Predictions: VDOT, race predictions, training paces, fitness history
- Premium stats: personal records, injury risk, efficiency, distribution,
  streaks and month comparison
- Trends: weekly/monthly volume, zone distribution by week, day and hour
  patterns, pace vs. HR, suggested goals and 80/20 balance

The service is stateless apart from its settings, which supply the fallback
heart rate anchors when zones are missing.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..analysis.aggregations import (
    day_of_week_breakdown,
    month_over_month,
    monthly_volume,
    suggest_goals,
    time_of_day_breakdown,
    weekly_volume,
)
from ..config import InsightsSettings, get_settings
from ..exceptions import ZonesValidationError
from ..metrics.consistency import calculate_streaks
from ..metrics.distribution import (
    analyze_training_distribution,
    estimate_max_hr,
    training_balance,
    weekly_zone_distribution,
)
from ..metrics.efficiency import (
    calculate_aerobic_efficiency,
    get_efficiency_trend,
    pace_hr_points,
    pace_hr_trend,
)
from ..metrics.efforts import (
    calculate_weighted_vdot,
    find_best_efforts,
    find_personal_records,
)
from ..metrics.fitness import build_fitness_history, current_fitness
from ..metrics.injury import calculate_acwr
from ..metrics.physiology import get_training_paces
from ..metrics.predictions import analyze_training_context, calculate_weighted_predictions
from ..models.activity import ActivityRecord, parse_activities
from ..models.athlete import (
    AthleteThresholds,
    HRZoneBoundary,
    parse_zones,
    thresholds_from_zones,
)


logger = logging.getLogger(__name__)


ActivityInput = Iterable[Union[ActivityRecord, dict]]
ZonesInput = Optional[Iterable[Union[HRZoneBoundary, dict]]]


class PerformanceService:
    """
    Builds JSON-ready report dictionaries from activity history.

    Example:
        service = PerformanceService()
        report = service.build_predictions_report(activities, zones)
        report["racePredictions"]["10K"]  # seconds
    """

    def __init__(self, settings: Optional[InsightsSettings] = None):
        self.settings = settings or get_settings()

    def resolve_thresholds(self, zones: ZonesInput = None) -> AthleteThresholds:
        """
        Max and threshold HR from zones, falling back to configured defaults.

        Malformed zones are treated as missing so reports still build.
        """
        try:
            parsed = parse_zones(zones)
        except ZonesValidationError as e:
            logger.warning(f"Ignoring invalid heart rate zones: {e.message}")
            parsed = None

        return thresholds_from_zones(
            parsed,
            default_max_hr=self.settings.default_max_hr,
            default_threshold_hr=self.settings.default_threshold_hr,
            rest_hr=self.settings.default_rest_hr,
        )

    def _parse(self, activities: ActivityInput) -> List[ActivityRecord]:
        return parse_activities(activities)

    def build_predictions_report(
        self,
        activities: ActivityInput,
        zones: ZonesInput = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        VDOT, race predictions and fitness history.

        Args:
            activities: Raw upstream activity dicts or ActivityRecords
            zones: Athlete heart rate zones, lowest first
            now: Reference time (default: now)

        Returns:
            Report dictionary with camelCase keys
        """
        now = now or datetime.now()
        records = self._parse(activities)
        thresholds = self.resolve_thresholds(zones)

        efforts = find_best_efforts(records, min_distance=self.settings.best_effort_min_distance)
        weighted = calculate_weighted_vdot(efforts)

        history = build_fitness_history(
            records,
            max_hr=thresholds.max_hr,
            threshold_hr=thresholds.threshold_hr,
            rest_hr=thresholds.rest_hr,
            days_back=self.settings.fitness_days_back,
            today=now.date(),
        )
        fitness = current_fitness(history)

        context = analyze_training_context(records, fitness.tsb, now=now)
        predictions = calculate_weighted_predictions(efforts, context)
        paces = get_training_paces(weighted.vdot) if weighted.vdot > 0 else None

        logger.debug(
            f"Predictions report: {len(records)} activities, {len(efforts)} efforts, "
            f"VDOT {weighted.vdot} ({weighted.confidence}% confidence), TSB {fitness.tsb}"
        )

        return {
            "vdot": weighted.vdot,
            "vdotConfidence": weighted.confidence,
            "effortsUsed": weighted.efforts_used,
            "racePredictions": predictions.predictions,
            "adjustments": {
                name: adjustment.to_dict()
                for name, adjustment in predictions.adjustments.items()
            },
            "trainingContext": context.to_dict(),
            "trainingPaces": paces.to_dict() if paces else None,
            "bestEfforts": [e.to_dict() for e in weighted.used_efforts],
            "fitnessHistory": [p.to_dict() for p in history],
            "currentFitness": fitness.to_dict(),
            "maxHR": thresholds.max_hr,
            "thresholdHR": thresholds.threshold_hr,
        }

    def build_premium_report(
        self,
        activities: ActivityInput,
        zones: ZonesInput = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Personal records, injury risk, efficiency, distribution and streaks.

        Args:
            activities: Raw upstream activity dicts or ActivityRecords
            zones: Athlete heart rate zones, lowest first
            now: Reference time (default: now)

        Returns:
            Report dictionary with camelCase keys
        """
        now = now or datetime.now()
        records = self._parse(activities)
        thresholds = self.resolve_thresholds(zones)

        personal_records = find_personal_records(records)
        injury_risk = calculate_acwr(
            records,
            max_hr=thresholds.max_hr,
            threshold_hr=thresholds.threshold_hr,
            rest_hr=thresholds.rest_hr,
            now=now,
        )
        efficiency = calculate_aerobic_efficiency(
            records, limit=self.settings.efficiency_history_limit
        )
        trend = get_efficiency_trend(efficiency)
        distribution = analyze_training_distribution(records, max_hr=thresholds.max_hr)
        streaks = calculate_streaks(records, now=now)
        comparison = month_over_month(records, now=now)

        logger.debug(
            f"Premium report: {len(records)} activities, {len(personal_records)} PRs, "
            f"ACWR {injury_risk.acwr} ({injury_risk.risk_level.value})"
        )

        return {
            "personalRecords": [r.to_dict() for r in personal_records],
            "injuryRisk": injury_risk.to_dict(),
            "efficiencyData": [p.to_dict() for p in efficiency],
            "efficiencyTrend": trend.to_dict() if trend else None,
            "trainingDistribution": distribution.to_dict(),
            "streaks": streaks.to_dict(),
            "monthComparison": comparison.to_dict(),
        }

    def build_trends_report(
        self,
        activities: ActivityInput,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Volume series and activity patterns.

        Zone distribution uses a max HR estimated from the activities
        themselves, not the athlete's zones.

        Returns:
            Report dictionary with camelCase keys
        """
        now = now or datetime.now()
        records = self._parse(activities)
        estimated_max_hr = estimate_max_hr(records)

        weekly = weekly_volume(records, now=now)
        monthly = monthly_volume(records, now=now)
        zones_by_week = weekly_zone_distribution(records, now=now, max_hr=estimated_max_hr)
        pace_hr = pace_hr_points(records)
        balance = training_balance(zones_by_week)

        logger.debug(
            f"Trends report: {len(records)} activities, estimated max HR {estimated_max_hr}, "
            f"{balance.easy_percent}% easy"
        )

        return {
            "weeklyData": [w.to_dict() for w in weekly],
            "monthlyData": [m.to_dict() for m in monthly],
            "monthComparison": month_over_month(records, now=now).to_dict(),
            "zoneDistribution": [z.to_dict() for z in zones_by_week],
            "timeOfDayData": [t.to_dict() for t in time_of_day_breakdown(records)],
            "dayOfWeekData": [d.to_dict() for d in day_of_week_breakdown(records)],
            "paceHRData": [p.to_dict() for p in pace_hr],
            "efficiencyTrend": pace_hr_trend(pace_hr),
            "goals": [g.to_dict() for g in suggest_goals(records, now=now)],
            "trainingBalance": balance.to_dict(),
            "estimatedMaxHR": estimated_max_hr,
        }
