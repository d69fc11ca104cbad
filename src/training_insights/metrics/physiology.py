"""
Running physiology formulas.

Implements the performance and load formulas the rest of the engine builds on:
- VDOT (Jack Daniels' VO2max equivalent from a race performance)
- Riegel race-time extrapolation
- VDOT-based race time prediction and training paces
- Heart-rate-based load scores (hrTSS, TRIMP)

References:
- Jack Daniels' Running Formula (3rd edition)
- Riegel, P. (1981). Athletic records and human endurance. American Scientist.
- Banister, E.W. (1991). Modeling elite athletic performance.
"""

import math
from dataclasses import dataclass
from typing import Dict

from ..utils.formatting import velocity_to_pace


# Daniels' oxygen cost polynomial: VO2 = A + B*v + C*v^2 (v in m/min)
OXYGEN_COST_A = -4.60
OXYGEN_COST_B = 0.182258
OXYGEN_COST_C = 0.000104

# Riegel fatigue exponent for well-trained endurance athletes (classic: 1.06)
DEFAULT_RIEGEL_EXPONENT = 1.05

DEFAULT_REST_HR = 60

# Training intensities as fraction of vVO2max
TRAINING_INTENSITIES = {
    "easy_min": 0.59,
    "easy_max": 0.74,
    "marathon": 0.75,
    "threshold": 0.83,
    "interval": 0.95,
    "repetition": 1.00,
}


@dataclass(frozen=True)
class TrainingPaces:
    """Training paces per kilometer (M:SS) derived from a VDOT."""

    easy_min: str  # Faster end of the easy range
    easy_max: str  # Slower end of the easy range
    marathon: str
    threshold: str
    interval: str
    repetition: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "easy": {"min": self.easy_min, "max": self.easy_max},
            "marathon": self.marathon,
            "threshold": self.threshold,
            "interval": self.interval,
            "repetition": self.repetition,
        }


def oxygen_cost(velocity_m_per_min: float) -> float:
    """Oxygen cost (ml/kg/min) of running at the given velocity."""
    return (
        OXYGEN_COST_A
        + OXYGEN_COST_B * velocity_m_per_min
        + OXYGEN_COST_C * velocity_m_per_min ** 2
    )


def calculate_vdot(distance_m: float, time_sec: float) -> float:
    """
    Calculate VDOT using Daniels' formula.

    The formula accounts for:
    1. Oxygen cost of running at the race velocity
    2. Percentage of VO2max that can be sustained for the race duration

    Args:
        distance_m: Distance in meters
        time_sec: Time in seconds

    Returns:
        VDOT rounded to one decimal, or NaN if time_sec <= 0 (callers
        are expected to filter such efforts out)

    Example:
        >>> calculate_vdot(5000, 1200)  # 5K in 20:00
        49.8
    """
    if time_sec <= 0:
        return math.nan

    time_min = time_sec / 60
    velocity = distance_m / time_min

    # Drop-dead formula: fraction of VO2max sustainable for time_min
    pct_max = (
        0.8
        + 0.1894393 * math.exp(-0.012778 * time_min)
        + 0.2989558 * math.exp(-0.1932605 * time_min)
    )

    vdot = oxygen_cost(velocity) / pct_max
    return round(vdot, 1)


def riegel_prediction(
    known_time: float,
    known_distance: float,
    target_distance: float,
    exponent: float = DEFAULT_RIEGEL_EXPONENT,
) -> float:
    """
    Predict a race time with Riegel's formula: T2 = T1 * (D2/D1)^exponent.

    Exponent guide:
    - 1.04-1.05: well-trained endurance athletes
    - 1.06: average runners
    - 1.07-1.08: less trained runners

    Args:
        known_time: Time in seconds for the known distance
        known_distance: Known distance in meters
        target_distance: Target distance in meters
        exponent: Fatigue exponent

    Returns:
        Predicted time in seconds, NaN if known_distance <= 0
    """
    if known_distance <= 0:
        return math.nan
    return known_time * (target_distance / known_distance) ** exponent


def vvo2max_from_vdot(vdot: float) -> float:
    """Approximate velocity at VO2max (m/min) from VDOT (linear inverse)."""
    return (vdot - OXYGEN_COST_A) / OXYGEN_COST_B


def race_intensity(target_distance: float) -> float:
    """
    Sustainable fraction of vVO2max for a race distance.

    Linear within each band, derived from Daniels' tables:
    - <= 5K: 94-98%
    - <= 10K: 90-94%
    - <= half marathon: 85-90%
    - beyond: 80-85%
    """
    if target_distance <= 5000:
        return 0.94 + (5000 - target_distance) / 5000 * 0.04
    elif target_distance <= 10000:
        return 0.90 + (10000 - target_distance) / 10000 * 0.04
    elif target_distance <= 21097:
        return 0.85 + (21097 - target_distance) / 21097 * 0.05
    else:
        return 0.80 + (42195 - target_distance) / 42195 * 0.05


def predict_from_vdot(vdot: float, target_distance: float) -> int:
    """
    Predict race time from VDOT.

    Tends to be more optimistic than Riegel for trained runners.

    Args:
        vdot: VDOT value
        target_distance: Target distance in meters

    Returns:
        Predicted time in whole seconds (0 if the inputs give no velocity)
    """
    race_velocity = vvo2max_from_vdot(vdot) * race_intensity(target_distance)
    if race_velocity <= 0 or target_distance <= 0:
        return 0

    time_min = target_distance / race_velocity
    return round(time_min * 60)


def get_training_paces(vdot: float) -> TrainingPaces:
    """
    Calculate training paces from VDOT.

    Paces are fixed fractions of vVO2max:
    easy 59-74%, marathon 75%, threshold 83%, interval 95%, repetition 100%.

    Args:
        vdot: VDOT value

    Returns:
        TrainingPaces with M:SS per km strings
    """
    v_max = vvo2max_from_vdot(vdot)
    paces: Dict[str, str] = {
        name: velocity_to_pace(v_max * pct)
        for name, pct in TRAINING_INTENSITIES.items()
    }

    # Higher intensity gives the faster (lower) end of the easy range
    return TrainingPaces(
        easy_min=paces["easy_max"],
        easy_max=paces["easy_min"],
        marathon=paces["marathon"],
        threshold=paces["threshold"],
        interval=paces["interval"],
        repetition=paces["repetition"],
    )


def calculate_hrtss(
    duration_sec: float,
    avg_hr: float,
    threshold_hr: float,
    max_hr: float,
    rest_hr: float = DEFAULT_REST_HR,
) -> float:
    """
    Heart Rate Training Stress Score.

    Intensity Factor is the session's heart rate reserve fraction relative to
    the threshold's reserve fraction; hrTSS = hours * IF^2 * 100, so one hour
    at threshold scores 100.

    Args:
        duration_sec: Duration in seconds
        avg_hr: Average heart rate
        threshold_hr: Lactate threshold heart rate
        max_hr: Maximum heart rate
        rest_hr: Resting heart rate

    Returns:
        hrTSS rounded to a whole number; 0 when the heart rate anchors are
        degenerate (max or threshold not above rest) or the duration is empty
    """
    hr_reserve = max_hr - rest_hr
    if hr_reserve <= 0 or threshold_hr <= rest_hr or duration_sec <= 0:
        return 0.0

    session_reserve = max(0.0, (avg_hr - rest_hr) / hr_reserve)
    threshold_reserve = (threshold_hr - rest_hr) / hr_reserve
    intensity_factor = session_reserve / threshold_reserve

    tss = (duration_sec / 3600) * intensity_factor ** 2 * 100
    return float(round(tss))


def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    max_hr: float,
    rest_hr: float = DEFAULT_REST_HR,
    gender: str = "male",
) -> float:
    """
    Training Impulse using Banister's exponential formula.

    TRIMP = duration * HRr * 0.64 * e^(k * HRr), with k = 1.92 (male) or
    1.67 (female).

    Returns:
        TRIMP rounded to a whole number, 0 if max_hr <= rest_hr
    """
    hr_reserve = max_hr - rest_hr
    if hr_reserve <= 0:
        return 0.0

    delta_hr = (avg_hr - rest_hr) / hr_reserve
    k = 1.67 if gender.lower() == "female" else 1.92

    trimp = duration_min * delta_hr * 0.64 * math.exp(k * delta_hr)
    return float(round(trimp))


def estimate_vo2max_from_hr(
    pace_sec_per_km: float,
    avg_hr: float,
    max_hr: float,
    rest_hr: float = DEFAULT_REST_HR,
) -> float:
    """
    Estimate VO2max from a steady effort, assuming %HRR tracks %VO2 reserve.

    Returns:
        VO2max (ml/kg/min) rounded to one decimal, 0 on invalid inputs
    """
    if max_hr <= rest_hr or pace_sec_per_km <= 0:
        return 0.0

    hr_reserve = (avg_hr - rest_hr) / (max_hr - rest_hr)
    if hr_reserve <= 0:
        return 0.0

    velocity = 1000 / (pace_sec_per_km / 60)
    return round(oxygen_cost(velocity) / hr_reserve, 1)
