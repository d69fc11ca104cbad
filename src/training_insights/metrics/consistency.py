"""Activity streaks and training consistency."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from ..models.activity import ActivityRecord


WEEK_DAYS = 7
MONTH_DAYS = 30

CONSISTENCY_WINDOW_DAYS = 28
IDEAL_ACTIVITIES_PER_WEEK = 4


@dataclass(frozen=True)
class StreakData:
    """Streaks of consecutive active days and recent frequency."""

    current_streak: int
    longest_streak: int
    this_week_activities: int
    this_month_activities: int
    consistency_score: int  # 0-100

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "thisWeekActivities": self.this_week_activities,
            "thisMonthActivities": self.this_month_activities,
            "consistencyScore": self.consistency_score,
        }


def _longest_run(days: List[date]) -> int:
    longest = 1
    streak = 1
    for previous, current in zip(days, days[1:]):
        if (current - previous).days == 1:
            streak += 1
        else:
            streak = 1
        longest = max(longest, streak)
    return longest


def _current_run(days: List[date], today: date) -> int:
    # Streak is broken unless the last active day is today or yesterday
    if (today - days[-1]).days not in (0, 1):
        return 0

    streak = 1
    for index in range(len(days) - 1, 0, -1):
        if (days[index] - days[index - 1]).days != 1:
            break
        streak += 1
    return streak


def calculate_streaks(
    activities: Sequence[ActivityRecord],
    now: Optional[datetime] = None,
) -> StreakData:
    """
    Calculate activity streaks and the consistency score.

    Streaks count distinct calendar days. The consistency score compares the
    weekly average over the last 28 days with 4 activities per week:
    min(100, round(avg_per_week / 4 * 100)).

    Args:
        activities: Activity history
        now: Reference time; its date is "today" (default: now)

    Returns:
        StreakData, all zeros without activities
    """
    if not activities:
        return StreakData(
            current_streak=0,
            longest_streak=0,
            this_week_activities=0,
            this_month_activities=0,
            consistency_score=0,
        )

    now = now or datetime.now()
    days = sorted({a.local_date for a in activities})

    week_ago = now - timedelta(days=WEEK_DAYS)
    month_ago = now - timedelta(days=MONTH_DAYS)
    consistency_start = now - timedelta(days=CONSISTENCY_WINDOW_DAYS)

    this_week = sum(1 for a in activities if a.start_date >= week_ago)
    this_month = sum(1 for a in activities if a.start_date >= month_ago)
    in_window = sum(1 for a in activities if a.start_date >= consistency_start)

    avg_per_week = in_window / (CONSISTENCY_WINDOW_DAYS / WEEK_DAYS)
    consistency = min(100, round(avg_per_week / IDEAL_ACTIVITIES_PER_WEEK * 100))

    return StreakData(
        current_streak=_current_run(days, now.date()),
        longest_streak=_longest_run(days),
        this_week_activities=this_week,
        this_month_activities=this_month,
        consistency_score=consistency,
    )
