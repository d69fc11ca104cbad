"""Fitness-Fatigue model calculations (CTL, ATL, TSB)."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.activity import ActivityRecord
from .physiology import DEFAULT_REST_HR, calculate_hrtss


CTL_TIME_CONSTANT = 42
ATL_TIME_CONSTANT = 7

DEFAULT_DAYS_BACK = 90


@dataclass(frozen=True)
class FitnessPoint:
    """Daily fitness metrics from the Fitness-Fatigue model."""

    date: date
    tss: float  # hrTSS accumulated on this day
    ctl: float  # Chronic Training Load (fitness) - 42 day EWMA
    atl: float  # Acute Training Load (fatigue) - 7 day EWMA
    tsb: float  # Training Stress Balance (form) = CTL - ATL

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "tss": self.tss,
            "ctl": self.ctl,
            "atl": self.atl,
            "tsb": self.tsb,
        }


def ewma_step(previous: float, value: float, time_constant: int) -> float:
    """
    One day of the exponentially weighted load recurrence.

    EWMA_n = EWMA_{n-1} + (value - EWMA_{n-1}) / time_constant
    """
    return previous + (value - previous) / time_constant


def calculate_ctl(daily_tss: Iterable[float], previous_ctl: float = 0.0) -> float:
    """Chronic Training Load after applying each day's TSS in order."""
    ctl = previous_ctl
    for tss in daily_tss:
        ctl = ewma_step(ctl, tss, CTL_TIME_CONSTANT)
    return round(ctl, 1)


def calculate_atl(daily_tss: Iterable[float], previous_atl: float = 0.0) -> float:
    """Acute Training Load after applying each day's TSS in order."""
    atl = previous_atl
    for tss in daily_tss:
        atl = ewma_step(atl, tss, ATL_TIME_CONSTANT)
    return round(atl, 1)


def calculate_tsb(ctl: float, atl: float) -> float:
    """
    Training Stress Balance (form): CTL - ATL.

    Positive = fresh/recovered, negative = fatigued.
    """
    return round(ctl - atl, 1)


def build_fitness_history(
    activities: Sequence[ActivityRecord],
    max_hr: float = 190,
    threshold_hr: float = 165,
    rest_hr: float = DEFAULT_REST_HR,
    days_back: int = DEFAULT_DAYS_BACK,
    today: Optional[date] = None,
) -> List[FitnessPoint]:
    """
    Build the daily CTL/ATL/TSB series for a trailing window.

    Every calendar day from ``today - days_back`` through ``today`` gets a
    point, in chronological order. Days without activity have zero TSS and
    still decay both loads. Activities without heart rate contribute nothing.
    Both loads start from zero at the first day of the window.

    Args:
        activities: Activity history
        max_hr: Maximum heart rate
        threshold_hr: Lactate threshold heart rate
        rest_hr: Resting heart rate
        days_back: Window length in days before today
        today: Last day of the window (default: current date)

    Returns:
        List of FitnessPoint, ``days_back + 1`` entries
    """
    today = today or date.today()
    start = today - timedelta(days=days_back)

    daily_tss: Dict[date, float] = {
        start + timedelta(days=offset): 0.0 for offset in range(days_back + 1)
    }

    for activity in activities:
        day = activity.local_date
        if day not in daily_tss or not activity.has_heart_rate:
            continue
        daily_tss[day] += calculate_hrtss(
            activity.moving_time,
            activity.average_heartrate,
            threshold_hr,
            max_hr,
            rest_hr,
        )

    history: List[FitnessPoint] = []
    ctl = 0.0
    atl = 0.0

    for day in sorted(daily_tss):
        tss = daily_tss[day]
        ctl = ewma_step(ctl, tss, CTL_TIME_CONSTANT)
        atl = ewma_step(atl, tss, ATL_TIME_CONSTANT)

        rounded_ctl = round(ctl, 1)
        rounded_atl = round(atl, 1)
        history.append(
            FitnessPoint(
                date=day,
                tss=tss,
                ctl=rounded_ctl,
                atl=rounded_atl,
                tsb=calculate_tsb(rounded_ctl, rounded_atl),
            )
        )

    return history


def current_fitness(history: Sequence[FitnessPoint]) -> FitnessPoint:
    """Latest point of a fitness history, or an all-zero point when empty."""
    if history:
        return history[-1]
    return FitnessPoint(date=date.today(), tss=0.0, ctl=0.0, atl=0.0, tsb=0.0)
