"""Period aggregations (weekly, monthly) and activity-pattern breakdowns."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..models.activity import ActivityRecord


# Simple TSS estimate: intensity = avg HR / 180, or this value without HR
REFERENCE_HR = 180
DEFAULT_INTENSITY = 0.7

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Goals: 10% above the average of the last 4 weeks (current week included)
GOAL_WEEKS = 4
GOAL_INCREASE = 1.1
WEEKS_PER_MONTH = 4.3
MIN_WEEKLY_ACTIVITIES_GOAL = 3


def get_week_start(day: date) -> date:
    """Get Monday of the week containing the date."""
    return day - timedelta(days=day.weekday())


def get_month_start(day: date) -> date:
    """Get first day of the month."""
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """First day of the month ``months`` away from the month of ``day``."""
    month_index = day.year * 12 + (day.month - 1) + months
    return date(month_index // 12, month_index % 12 + 1, 1)


def estimate_tss(activity: ActivityRecord) -> float:
    """Rough TSS from duration and average HR relative to 180 bpm."""
    if activity.has_heart_rate:
        intensity = activity.average_heartrate / REFERENCE_HR
    else:
        intensity = DEFAULT_INTENSITY
    return activity.moving_time / 3600 * 100 * intensity ** 2


@dataclass(frozen=True)
class PeriodVolume:
    """Training volume for one calendar period."""

    period_start: date
    label: str
    distance: float  # meters
    time: float  # seconds
    activities: int
    avg_pace: float  # sec/km over runs, 0 without run distance
    avg_hr: float  # mean of run average HRs, 0 without HR
    elevation: float  # meters
    tss: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "periodStart": self.period_start.isoformat(),
            "distance": round(self.distance, 1),
            "time": self.time,
            "activities": self.activities,
            "avgPace": round(self.avg_pace, 1),
            "avgHR": round(self.avg_hr, 1),
            "elevation": round(self.elevation, 1),
            "tss": round(self.tss, 1),
        }


def _summarize_period(
    activities: Sequence[ActivityRecord],
    period_start: date,
    label: str,
) -> PeriodVolume:
    runs = [a for a in activities if a.is_run]
    run_distance = sum(a.distance for a in runs)
    run_time = sum(a.moving_time for a in runs)
    run_hrs = [a.average_heartrate for a in runs if a.has_heart_rate]

    return PeriodVolume(
        period_start=period_start,
        label=label,
        distance=sum(a.distance for a in activities),
        time=sum(a.moving_time for a in activities),
        activities=len(activities),
        avg_pace=run_time / (run_distance / 1000) if run_distance > 0 else 0.0,
        avg_hr=sum(run_hrs) / len(run_hrs) if run_hrs else 0.0,
        elevation=sum(a.total_elevation_gain for a in activities),
        tss=sum(estimate_tss(a) for a in activities),
    )


def weekly_volume(
    activities: Sequence[ActivityRecord],
    weeks: int = 12,
    now: Optional[datetime] = None,
) -> List[PeriodVolume]:
    """
    Volume per Monday-based week for the last ``weeks`` weeks.

    Returns:
        One entry per week, oldest first, current week last
    """
    now = now or datetime.now()
    first_week = get_week_start(now.date()) - timedelta(weeks=weeks - 1)

    buckets: Dict[int, List[ActivityRecord]] = defaultdict(list)
    for activity in activities:
        offset = (activity.local_date - first_week).days // 7
        if 0 <= offset < weeks:
            buckets[offset].append(activity)

    result = []
    for offset in range(weeks):
        week_start = first_week + timedelta(weeks=offset)
        result.append(
            _summarize_period(buckets[offset], week_start, week_start.strftime("%d/%m"))
        )
    return result


def monthly_volume(
    activities: Sequence[ActivityRecord],
    months: int = 12,
    now: Optional[datetime] = None,
) -> List[PeriodVolume]:
    """
    Volume per calendar month for the last ``months`` months.

    Returns:
        One entry per month, oldest first, current month last
    """
    now = now or datetime.now()
    current_month = get_month_start(now.date())

    buckets: Dict[date, List[ActivityRecord]] = defaultdict(list)
    for activity in activities:
        buckets[get_month_start(activity.local_date)].append(activity)

    result = []
    for offset in range(months - 1, -1, -1):
        month_start = add_months(current_month, -offset)
        result.append(
            _summarize_period(buckets[month_start], month_start, month_start.strftime("%b %y"))
        )
    return result


# ============================================
# PERIOD COMPARISON
# ============================================

@dataclass(frozen=True)
class PeriodTotals:
    """Raw totals for one comparison period."""

    distance: float
    time: float
    activities: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distance": self.distance,
            "time": self.time,
            "activities": self.activities,
        }


@dataclass(frozen=True)
class PeriodComparison:
    """Current vs. previous period with whole-percent changes."""

    current: PeriodTotals
    previous: PeriodTotals
    distance_change: int
    time_change: int
    activities_change: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "distanceChange": self.distance_change,
            "timeChange": self.time_change,
            "activitiesChange": self.activities_change,
        }


def period_totals(activities: Sequence[ActivityRecord]) -> PeriodTotals:
    return PeriodTotals(
        distance=sum(a.distance for a in activities),
        time=sum(a.moving_time for a in activities),
        activities=len(activities),
    )


def percent_change(current: float, previous: float) -> int:
    """Whole-number percent change, 0 when there is no previous value."""
    if previous <= 0:
        return 0
    return round((current - previous) / previous * 100)


def compare_periods(current: PeriodTotals, previous: PeriodTotals) -> PeriodComparison:
    return PeriodComparison(
        current=current,
        previous=previous,
        distance_change=percent_change(current.distance, previous.distance),
        time_change=percent_change(current.time, previous.time),
        activities_change=percent_change(current.activities, previous.activities),
    )


def month_over_month(
    activities: Sequence[ActivityRecord],
    now: Optional[datetime] = None,
) -> PeriodComparison:
    """Compare the current calendar month (to date) with the previous one."""
    now = now or datetime.now()
    this_month = get_month_start(now.date())
    last_month = add_months(this_month, -1)

    current = [a for a in activities if a.local_date >= this_month]
    previous = [a for a in activities if last_month <= a.local_date < this_month]

    return compare_periods(period_totals(current), period_totals(previous))


# ============================================
# ACTIVITY PATTERNS
# ============================================

@dataclass(frozen=True)
class DayOfWeekStats:
    """Activity count, distance and run pace for one weekday."""

    day: int  # 0 = Monday
    day_name: str
    count: int
    distance: float
    avg_pace: float  # sec/km, mean over runs with distance

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "day": self.day,
            "dayName": self.day_name,
            "count": self.count,
            "distance": round(self.distance, 1),
            "avgPace": round(self.avg_pace, 1),
        }


@dataclass(frozen=True)
class TimeOfDayStats:
    """Run count, pace and HR for one start hour."""

    hour: int
    count: int
    avg_pace: float
    avg_hr: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "hour": self.hour,
            "count": self.count,
            "avgPace": round(self.avg_pace, 1),
            "avgHR": round(self.avg_hr, 1),
        }


def day_of_week_breakdown(activities: Sequence[ActivityRecord]) -> List[DayOfWeekStats]:
    """
    Activity count and distance per weekday, Monday first.

    All seven days are always present.
    """
    counts = [0] * 7
    distances = [0.0] * 7
    paces: List[List[float]] = [[] for _ in range(7)]

    for activity in activities:
        day = activity.start_date.weekday()
        counts[day] += 1
        distances[day] += activity.distance
        if activity.is_run and activity.distance > 0:
            paces[day].append(activity.pace_sec_per_km)

    return [
        DayOfWeekStats(
            day=day,
            day_name=DAY_NAMES[day],
            count=counts[day],
            distance=distances[day],
            avg_pace=sum(paces[day]) / len(paces[day]) if paces[day] else 0.0,
        )
        for day in range(7)
    ]


def time_of_day_breakdown(activities: Sequence[ActivityRecord]) -> List[TimeOfDayStats]:
    """
    Run count, mean pace and mean HR per start hour.

    Only runs with distance count; hours without runs are omitted.
    """
    by_hour: Dict[int, List[ActivityRecord]] = defaultdict(list)
    for activity in activities:
        if activity.is_run and activity.distance > 0:
            by_hour[activity.start_date.hour].append(activity)

    result = []
    for hour in sorted(by_hour):
        runs = by_hour[hour]
        hrs = [a.average_heartrate for a in runs if a.has_heart_rate]
        result.append(
            TimeOfDayStats(
                hour=hour,
                count=len(runs),
                avg_pace=sum(a.pace_sec_per_km for a in runs) / len(runs),
                avg_hr=sum(hrs) / len(hrs) if hrs else 0.0,
            )
        )
    return result


# ============================================
# GOALS
# ============================================

class GoalType(str, Enum):
    """Suggested training goal."""

    WEEKLY_DISTANCE = "weekly_distance"
    WEEKLY_TIME = "weekly_time"
    WEEKLY_ACTIVITIES = "weekly_activities"
    MONTHLY_DISTANCE = "monthly_distance"


@dataclass(frozen=True)
class Goal:
    """A target with progress so far in its period."""

    goal_type: GoalType
    target: float
    current: float
    unit: str
    period: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.goal_type.value,
            "type": self.goal_type.value,
            "target": self.target,
            "current": self.current,
            "unit": self.unit,
            "period": self.period,
        }


def _round_to(value: float, step: int) -> int:
    return round(value / step) * step


def suggest_goals(
    activities: Sequence[ActivityRecord],
    now: Optional[datetime] = None,
) -> List[Goal]:
    """
    Weekly and monthly targets 10% above recent averages.

    Averages cover the last 4 weeks including the current one. Distance
    targets round to whole kilometers and time targets to whole hours; the
    activity target is never below 3.

    Args:
        activities: Activity history
        now: Reference time (default: now)

    Returns:
        Weekly distance, weekly time, weekly activities and monthly distance
        goals, in that order
    """
    now = now or datetime.now()
    recent_weeks = weekly_volume(activities, weeks=GOAL_WEEKS, now=now)

    avg_distance = sum(w.distance for w in recent_weeks) / GOAL_WEEKS
    avg_time = sum(w.time for w in recent_weeks) / GOAL_WEEKS
    avg_activities = sum(w.activities for w in recent_weeks) / GOAL_WEEKS

    week_start = get_week_start(now.date())
    month_start = get_month_start(now.date())
    this_week = period_totals([a for a in activities if a.local_date >= week_start])
    this_month = period_totals([a for a in activities if a.local_date >= month_start])

    return [
        Goal(
            goal_type=GoalType.WEEKLY_DISTANCE,
            target=_round_to(avg_distance * GOAL_INCREASE, 1000),
            current=this_week.distance,
            unit="km",
            period="This week",
        ),
        Goal(
            goal_type=GoalType.WEEKLY_TIME,
            target=_round_to(avg_time * GOAL_INCREASE, 3600),
            current=this_week.time,
            unit="hours",
            period="This week",
        ),
        Goal(
            goal_type=GoalType.WEEKLY_ACTIVITIES,
            target=max(round(avg_activities), MIN_WEEKLY_ACTIVITIES_GOAL),
            current=this_week.activities,
            unit="activities",
            period="This week",
        ),
        Goal(
            goal_type=GoalType.MONTHLY_DISTANCE,
            target=_round_to(avg_distance * WEEKS_PER_MONTH * GOAL_INCREASE, 1000),
            current=this_month.distance,
            unit="km",
            period="This month",
        ),
    ]
