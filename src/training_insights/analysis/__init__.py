"""Time-series aggregations over activity history."""

from .aggregations import (
    DayOfWeekStats,
    Goal,
    GoalType,
    PeriodComparison,
    PeriodTotals,
    PeriodVolume,
    TimeOfDayStats,
    compare_periods,
    day_of_week_breakdown,
    month_over_month,
    monthly_volume,
    period_totals,
    suggest_goals,
    time_of_day_breakdown,
    weekly_volume,
)

__all__ = [
    "DayOfWeekStats",
    "Goal",
    "GoalType",
    "PeriodComparison",
    "PeriodTotals",
    "PeriodVolume",
    "TimeOfDayStats",
    "compare_periods",
    "day_of_week_breakdown",
    "month_over_month",
    "monthly_volume",
    "period_totals",
    "suggest_goals",
    "time_of_day_breakdown",
    "weekly_volume",
]
