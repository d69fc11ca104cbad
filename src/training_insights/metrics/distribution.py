"""
Training intensity distribution.

Checks the 80/20 (polarized) rule: most time easy, a small share hard and
little in the moderate "gray zone". Activities are bucketed by their average
heart rate as a share of max HR, weighted by moving time.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from ..models.activity import ActivityRecord


EASY_ZONE_CEILING = 0.75
MODERATE_ZONE_CEILING = 0.85

POLARIZED_MIN_EASY = 75
POLARIZED_MAX_MODERATE = 15

# Five-zone model by % of max HR: upper bounds of zones 1-4
FIVE_ZONE_CEILINGS = (60, 70, 80, 90)

# 80/20 check over five-zone time: Z1-Z2 easy, Z4-Z5 hard
BALANCE_MIN_EASY = 75
BALANCE_MAX_HARD = 20

# Activities must report a max HR above this to count toward the estimate
MAX_HR_ESTIMATE_FLOOR = 150
DEFAULT_ESTIMATED_MAX_HR = 190


@dataclass(frozen=True)
class TrainingDistribution:
    """Share of training time in easy, moderate and hard intensity."""

    easy_percent: int  # Z1-Z2
    moderate_percent: int  # Z3
    hard_percent: int  # Z4-Z5
    is_polarized: bool
    recommendation: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "zone1_2": self.easy_percent,
            "zone3": self.moderate_percent,
            "zone4_5": self.hard_percent,
            "isPolarized": self.is_polarized,
            "recommendation": self.recommendation,
        }


def analyze_training_distribution(
    activities: Sequence[ActivityRecord],
    max_hr: float = 190,
) -> TrainingDistribution:
    """
    Classify training time as easy (<75% max HR), moderate (<85%) or hard.

    Activities without heart rate are skipped.

    Args:
        activities: Activity history
        max_hr: Maximum heart rate

    Returns:
        TrainingDistribution with whole-number percentages; a zeroed result
        when no time could be classified
    """
    easy_time = 0.0
    moderate_time = 0.0
    hard_time = 0.0

    easy_ceiling = max_hr * EASY_ZONE_CEILING
    moderate_ceiling = max_hr * MODERATE_ZONE_CEILING

    for activity in activities:
        if not activity.has_heart_rate:
            continue

        hr = activity.average_heartrate
        if hr < easy_ceiling:
            easy_time += activity.moving_time
        elif hr < moderate_ceiling:
            moderate_time += activity.moving_time
        else:
            hard_time += activity.moving_time

    total_time = easy_time + moderate_time + hard_time
    if total_time == 0:
        return TrainingDistribution(
            easy_percent=0,
            moderate_percent=0,
            hard_percent=0,
            is_polarized=False,
            recommendation="Not enough heart rate data.",
        )

    easy_pct = easy_time / total_time * 100
    moderate_pct = moderate_time / total_time * 100
    hard_pct = hard_time / total_time * 100

    is_polarized = easy_pct >= POLARIZED_MIN_EASY and moderate_pct <= POLARIZED_MAX_MODERATE

    if is_polarized:
        recommendation = "Polarized distribution. Excellent for aerobic improvements."
    elif moderate_pct > 30:
        recommendation = "Too much time in gray zone (Z3). Train easier or harder."
    elif easy_pct < 70:
        recommendation = "Consider adding more easy volume for better recovery."
    else:
        recommendation = "Good distribution. Keep it up."

    return TrainingDistribution(
        easy_percent=round(easy_pct),
        moderate_percent=round(moderate_pct),
        hard_percent=round(hard_pct),
        is_polarized=is_polarized,
        recommendation=recommendation,
    )


@dataclass(frozen=True)
class WeeklyZoneDistribution:
    """Seconds spent in each of the five HR zones during one week."""

    week_start: date
    zones: Tuple[float, ...] = (0.0, 0.0, 0.0, 0.0, 0.0)

    @property
    def total(self) -> float:
        return sum(self.zones)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {"week": self.week_start.strftime("%d/%m")}
        for index, seconds in enumerate(self.zones, start=1):
            data[f"zone{index}"] = seconds
        return data


def estimate_max_hr(activities: Sequence[ActivityRecord]) -> float:
    """Highest recorded max HR above 150 bpm, or 190 when none is available."""
    candidates = [
        a.max_heartrate
        for a in activities
        if a.max_heartrate is not None and a.max_heartrate > MAX_HR_ESTIMATE_FLOOR
    ]
    return max(candidates) if candidates else DEFAULT_ESTIMATED_MAX_HR


def five_zone_index(avg_hr: float, max_hr: float) -> int:
    """Zero-based zone (0-4) for an average HR as a share of max HR."""
    hr_percent = avg_hr / max_hr * 100
    for index, ceiling in enumerate(FIVE_ZONE_CEILINGS):
        if hr_percent < ceiling:
            return index
    return len(FIVE_ZONE_CEILINGS)


def weekly_zone_distribution(
    activities: Sequence[ActivityRecord],
    weeks: int = 8,
    now: Optional[datetime] = None,
    max_hr: Optional[float] = None,
) -> List[WeeklyZoneDistribution]:
    """
    Time per five-zone HR band for each of the last ``weeks`` weeks.

    Weeks start on Monday; the current week is the last entry. Zones come
    from each activity's average HR, so this is a coarse estimate.

    Args:
        activities: Activity history
        weeks: Number of weeks, current week included
        now: Reference time (default: now)
        max_hr: Max HR for zone boundaries (default: estimated from activities)

    Returns:
        One entry per week, oldest first
    """
    now = now or datetime.now()
    max_hr = max_hr or estimate_max_hr(activities)

    today = now.date()
    current_week = today - timedelta(days=today.weekday())
    first_week = current_week - timedelta(weeks=weeks - 1)

    totals = [[0.0] * (len(FIVE_ZONE_CEILINGS) + 1) for _ in range(weeks)]

    for activity in activities:
        if not activity.has_heart_rate:
            continue
        offset = (activity.local_date - first_week).days // 7
        if not 0 <= offset < weeks:
            continue
        zone = five_zone_index(activity.average_heartrate, max_hr)
        totals[offset][zone] += activity.moving_time

    return [
        WeeklyZoneDistribution(
            week_start=first_week + timedelta(weeks=offset),
            zones=tuple(zone_totals),
        )
        for offset, zone_totals in enumerate(totals)
    ]


@dataclass(frozen=True)
class TrainingBalance:
    """80/20 check over weekly five-zone time."""

    easy_percent: int  # Z1-Z2
    moderate_percent: int  # Z3
    hard_percent: int  # Z4-Z5
    is_polarized: bool
    recommendation: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "easyPercent": self.easy_percent,
            "moderatePercent": self.moderate_percent,
            "hardPercent": self.hard_percent,
            "isPolarized": self.is_polarized,
            "recommendation": self.recommendation,
        }


def training_balance(weeks: Sequence[WeeklyZoneDistribution]) -> TrainingBalance:
    """
    Easy (Z1-Z2) and hard (Z4-Z5) share of all zone time across ``weeks``.

    Polarized means at least 75% easy and at most 20% hard. Moderate is the
    remainder, or 0 without any zone time.
    """
    total = sum(w.total for w in weeks)
    easy = sum(w.zones[0] + w.zones[1] for w in weeks)
    hard = sum(w.zones[3] + w.zones[4] for w in weeks)

    easy_pct = easy / total * 100 if total > 0 else 0.0
    hard_pct = hard / total * 100 if total > 0 else 0.0
    moderate_pct = 100 - easy_pct - hard_pct if total > 0 else 0.0

    if easy_pct < BALANCE_MIN_EASY:
        recommendation = "Consider more easy workouts (zone 1-2) for better recovery"
    elif hard_pct > BALANCE_MAX_HARD:
        recommendation = "Reduce high intensity slightly to avoid overtraining"
    else:
        recommendation = "Excellent polarized training balance"

    return TrainingBalance(
        easy_percent=round(easy_pct),
        moderate_percent=round(moderate_pct),
        hard_percent=round(hard_pct),
        is_polarized=easy_pct >= BALANCE_MIN_EASY and hard_pct <= BALANCE_MAX_HARD,
        recommendation=recommendation,
    )
