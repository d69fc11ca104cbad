"""Aerobic efficiency: distance covered per heartbeat."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.activity import ActivityRecord


MIN_EFFICIENCY_DISTANCE = 3000
DEFAULT_EFFICIENCY_LIMIT = 20

TREND_WINDOW = 5
MIN_TREND_POINTS = 6

# Pace vs. HR scatter: recent runs above an aerobic HR floor
PACE_HR_MIN_HR = 100
PACE_HR_LIMIT = 50
PACE_HR_TREND_WINDOW = 10


@dataclass(frozen=True)
class EfficiencyPoint:
    """Efficiency of a single run."""

    date: datetime
    activity_name: str
    pace: float  # sec/km
    avg_hr: float
    efficiency: float  # meters per heartbeat
    pace_hr_ratio: float  # lower is better

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "activityName": self.activity_name,
            "pace": round(self.pace, 1),
            "avgHR": self.avg_hr,
            "efficiency": self.efficiency,
            "paceHRRatio": self.pace_hr_ratio,
        }


@dataclass(frozen=True)
class EfficiencyTrend:
    """Recent vs. previous mean efficiency."""

    current: float
    previous: float
    change: float  # percent
    improving: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "previous": self.previous,
            "change": self.change,
            "improving": self.improving,
        }


def calculate_aerobic_efficiency(
    activities: Sequence[ActivityRecord],
    limit: int = DEFAULT_EFFICIENCY_LIMIT,
) -> List[EfficiencyPoint]:
    """
    Meters per heartbeat for runs of at least 3 km with heart rate.

    efficiency = distance / (avg_hr * moving_minutes)

    Returns:
        The most recent ``limit`` points, oldest first
    """
    points: List[EfficiencyPoint] = []

    for activity in activities:
        if not (
            activity.is_run
            and activity.has_heart_rate
            and activity.distance >= MIN_EFFICIENCY_DISTANCE
            and activity.moving_time > 0
        ):
            continue

        avg_hr = activity.average_heartrate
        pace = activity.pace_sec_per_km
        heartbeats = avg_hr * activity.moving_time_min

        points.append(
            EfficiencyPoint(
                date=activity.start_date,
                activity_name=activity.name,
                pace=pace,
                avg_hr=avg_hr,
                efficiency=round(activity.distance / heartbeats, 2),
                pace_hr_ratio=round(pace / avg_hr, 2),
            )
        )

    points.sort(key=lambda p: p.date)
    return points[-limit:] if limit > 0 else []


def get_efficiency_trend(points: Sequence[EfficiencyPoint]) -> Optional[EfficiencyTrend]:
    """
    Compare the mean efficiency of the last 5 points to the 5 before them.

    Returns:
        EfficiencyTrend, or None with fewer than 6 points or a zero older mean
    """
    if len(points) < MIN_TREND_POINTS:
        return None

    recent = points[-TREND_WINDOW:]
    older = points[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not older:
        return None

    recent_avg = sum(p.efficiency for p in recent) / len(recent)
    older_avg = sum(p.efficiency for p in older) / len(older)
    if older_avg == 0:
        return None

    change = (recent_avg - older_avg) / older_avg * 100

    return EfficiencyTrend(
        current=round(recent_avg, 2),
        previous=round(older_avg, 2),
        change=round(change, 1),
        improving=change > 0,
    )


# ============================================
# PACE VS. HEART RATE
# ============================================

@dataclass(frozen=True)
class PaceHRPoint:
    """Pace and average HR of a single run."""

    date: datetime
    activity_name: str
    pace: float  # sec/km
    hr: float
    efficiency: float  # speed per bpm, (m/s / bpm) * 1000

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.strftime("%Y-%m-%d"),
            "pace": round(self.pace, 1),
            "hr": self.hr,
            "efficiency": round(self.efficiency, 2),
            "activityName": self.activity_name,
        }


def pace_hr_points(
    activities: Sequence[ActivityRecord],
    limit: int = PACE_HR_LIMIT,
) -> List[PaceHRPoint]:
    """
    Pace against average HR for runs longer than 3 km above 100 bpm.

    Returns:
        The most recent ``limit`` points, oldest first
    """
    points: List[PaceHRPoint] = []

    for activity in activities:
        if not (
            activity.is_run
            and activity.has_heart_rate
            and activity.average_heartrate > PACE_HR_MIN_HR
            and activity.distance > MIN_EFFICIENCY_DISTANCE
            and activity.moving_time > 0
        ):
            continue

        pace = activity.pace_sec_per_km
        hr = activity.average_heartrate
        points.append(
            PaceHRPoint(
                date=activity.start_date,
                activity_name=activity.name,
                pace=pace,
                hr=hr,
                efficiency=1000 / pace / hr * 1000,
            )
        )

    points.sort(key=lambda p: p.date)
    return points[-limit:] if limit > 0 else []


def pace_hr_trend(points: Sequence[PaceHRPoint]) -> float:
    """
    Percent change in mean efficiency, last 10 points vs. first 10.

    With fewer than 20 points the two windows overlap. Returns 0 without
    points.
    """
    if not points:
        return 0.0

    recent = points[-PACE_HR_TREND_WINDOW:]
    older = points[:PACE_HR_TREND_WINDOW]

    recent_avg = sum(p.efficiency for p in recent) / len(recent)
    older_avg = sum(p.efficiency for p in older) / len(older)
    if older_avg <= 0:
        return 0.0

    return round((recent_avg - older_avg) / older_avg * 100, 1)
