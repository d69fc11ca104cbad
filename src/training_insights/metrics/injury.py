"""
Injury risk from the Acute:Chronic Workload Ratio (ACWR).

Acute load is the hrTSS of the last 7 days; chronic load is the average weekly
hrTSS over the last 28 days. Ratio bands:
- < 0.8: low (undertraining)
- 0.8 - 1.3: moderate (optimal)
- 1.3 - 1.5: high
- > 1.5: very high (injury risk)

Reference: Gabbett, T.J. (2016). The training-injury prevention paradox.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..models.activity import ActivityRecord
from .physiology import DEFAULT_REST_HR, calculate_hrtss


ACUTE_WINDOW_DAYS = 7
CHRONIC_WINDOW_DAYS = 28
WEEKS_IN_CHRONIC_WINDOW = 4


class RiskLevel(str, Enum):
    """Injury risk classification from ACWR."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


RISK_RECOMMENDATIONS = {
    RiskLevel.LOW: "Low load. You can gradually increase volume.",
    RiskLevel.MODERATE: "Optimal zone. Maintain this load level.",
    RiskLevel.HIGH: "High load. Consider reducing intensity.",
    RiskLevel.VERY_HIGH: "Alert! High injury risk. Reduce the load.",
}


@dataclass(frozen=True)
class InjuryRisk:
    """ACWR snapshot with its risk band."""

    acwr: float
    risk_level: RiskLevel
    weekly_load: int  # acute hrTSS, last 7 days
    chronic_load: int  # average weekly hrTSS, last 28 days
    recommendation: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "acwr": self.acwr,
            "riskLevel": self.risk_level.value,
            "weeklyLoad": self.weekly_load,
            "chronicLoad": self.chronic_load,
            "recommendation": self.recommendation,
        }


def classify_acwr(acwr: float) -> Tuple[RiskLevel, str]:
    """Risk level and recommendation for an ACWR value."""
    if acwr < 0.8:
        level = RiskLevel.LOW
    elif acwr <= 1.3:
        level = RiskLevel.MODERATE
    elif acwr <= 1.5:
        level = RiskLevel.HIGH
    else:
        level = RiskLevel.VERY_HIGH
    return level, RISK_RECOMMENDATIONS[level]


def calculate_acwr(
    activities: Sequence[ActivityRecord],
    max_hr: float = 190,
    threshold_hr: float = 165,
    rest_hr: float = DEFAULT_REST_HR,
    now: Optional[datetime] = None,
) -> InjuryRisk:
    """
    Calculate the Acute:Chronic Workload Ratio.

    Activities without heart rate are excluded from both loads. The ratio is
    0 when there is no chronic load.

    Args:
        activities: Activity history
        max_hr: Maximum heart rate
        threshold_hr: Lactate threshold heart rate
        rest_hr: Resting heart rate
        now: Reference time (default: now)

    Returns:
        InjuryRisk with ACWR rounded to 2 decimals
    """
    now = now or datetime.now()
    week_ago = now - timedelta(days=ACUTE_WINDOW_DAYS)
    month_ago = now - timedelta(days=CHRONIC_WINDOW_DAYS)

    acute_tss = 0.0
    chronic_tss = 0.0

    for activity in activities:
        if not activity.has_heart_rate or activity.start_date < month_ago:
            continue

        tss = calculate_hrtss(
            activity.moving_time,
            activity.average_heartrate,
            threshold_hr,
            max_hr,
            rest_hr,
        )
        chronic_tss += tss
        if activity.start_date >= week_ago:
            acute_tss += tss

    chronic_load = chronic_tss / WEEKS_IN_CHRONIC_WINDOW
    acwr = acute_tss / chronic_load if chronic_load > 0 else 0.0

    risk_level, recommendation = classify_acwr(acwr)

    return InjuryRisk(
        acwr=round(acwr, 2),
        risk_level=risk_level,
        weekly_load=round(acute_tss),
        chronic_load=round(chronic_load),
        recommendation=recommendation,
    )
