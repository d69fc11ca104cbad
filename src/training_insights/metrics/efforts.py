"""
Best-effort extraction and VDOT aggregation.

Best efforts are the fastest qualifying runs in an activity history. Grouping
them into distance ranges keeps a single performance per range, so the VDOT
estimate comes from PR-like marks rather than being diluted by training runs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..models.activity import ActivityRecord
from .physiology import calculate_vdot


DEFAULT_MIN_EFFORT_DISTANCE = 3000.0
DEFAULT_EFFORT_LIMIT = 10

# Each covered range adds this much confidence, capped at 100
CONFIDENCE_PER_RANGE = 25


@dataclass(frozen=True)
class DistanceRange:
    """A named distance band with its reliability weight as a predictor."""

    name: str
    min_distance: float
    max_distance: float
    weight: float

    def contains(self, distance: float) -> bool:
        return self.min_distance <= distance <= self.max_distance

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "min": self.min_distance,
            "max": self.max_distance,
            "weight": self.weight,
        }


# Longer distances are weighted higher. Ranges must not overlap: an effort is
# assigned to the first range that contains it.
DISTANCE_RANGES: Tuple[DistanceRange, ...] = (
    DistanceRange("5K", 4000, 6000, 1.0),
    DistanceRange("10K", 9000, 12000, 1.5),
    DistanceRange("15K", 14000, 17000, 2.0),
    DistanceRange("21K", 20000, 23000, 3.0),
    DistanceRange("30K", 28000, 35000, 3.5),
    DistanceRange("42K", 40000, 44000, 4.0),
)


@dataclass(frozen=True)
class BestEffort:
    """A qualifying run considered as a performance mark."""

    activity_id: object
    activity_name: str
    date: datetime
    distance: float  # meters
    time: float  # seconds
    pace: float  # sec/km

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "activityId": self.activity_id,
            "activityName": self.activity_name,
            "date": self.date.isoformat(),
            "distance": self.distance,
            "time": self.time,
            "pace": round(self.pace, 1),
        }


@dataclass(frozen=True)
class RangedEffort(BestEffort):
    """A best effort assigned to a distance range."""

    range_name: str = ""
    range_weight: float = 0.0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["rangeName"] = self.range_name
        data["rangeWeight"] = self.range_weight
        return data


@dataclass(frozen=True)
class WeightedVDOT:
    """VDOT averaged over the best effort of each covered range."""

    vdot: float
    confidence: int  # 0-100
    efforts_used: int
    used_efforts: List[RangedEffort] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "vdot": self.vdot,
            "confidence": self.confidence,
            "effortsUsed": self.efforts_used,
            "usedEfforts": [e.to_dict() for e in self.used_efforts],
        }


def find_best_efforts(
    activities: Sequence[ActivityRecord],
    min_distance: float = DEFAULT_MIN_EFFORT_DISTANCE,
    limit: int = DEFAULT_EFFORT_LIMIT,
) -> List[BestEffort]:
    """
    Select the fastest runs of at least ``min_distance`` meters.

    Activities with no moving time are ignored, they cannot yield a VDOT.

    Args:
        activities: Activity history
        min_distance: Minimum distance in meters
        limit: Maximum number of efforts returned

    Returns:
        Efforts sorted by pace, fastest first
    """
    efforts = [
        BestEffort(
            activity_id=activity.id,
            activity_name=activity.name,
            date=activity.start_date,
            distance=activity.distance,
            time=activity.moving_time,
            pace=activity.pace_sec_per_km,
        )
        for activity in activities
        if activity.is_run
        and activity.distance >= min_distance
        and activity.distance > 0
        and activity.moving_time > 0
    ]
    efforts.sort(key=lambda e: e.pace)
    return efforts[:limit]


def find_distance_range(
    distance: float,
    ranges: Sequence[DistanceRange] = DISTANCE_RANGES,
) -> Optional[DistanceRange]:
    """First range containing ``distance``, or None."""
    for distance_range in ranges:
        if distance_range.contains(distance):
            return distance_range
    return None


def get_best_efforts_by_distance(
    efforts: Sequence[BestEffort],
    ranges: Sequence[DistanceRange] = DISTANCE_RANGES,
) -> List[RangedEffort]:
    """
    Keep the fastest effort per distance range.

    Efforts outside every range are dropped. The result holds at most one
    effort per range, in order of first appearance.
    """
    best_by_range: Dict[str, RangedEffort] = {}

    for effort in efforts:
        distance_range = find_distance_range(effort.distance, ranges)
        if distance_range is None:
            continue

        existing = best_by_range.get(distance_range.name)
        if existing is None or effort.pace < existing.pace:
            best_by_range[distance_range.name] = RangedEffort(
                activity_id=effort.activity_id,
                activity_name=effort.activity_name,
                date=effort.date,
                distance=effort.distance,
                time=effort.time,
                pace=effort.pace,
                range_name=distance_range.name,
                range_weight=distance_range.weight,
            )

    return list(best_by_range.values())


def calculate_weighted_vdot(efforts: Sequence[BestEffort]) -> WeightedVDOT:
    """
    Weighted average VDOT over the best effort of each distance range.

    Confidence grows by 25 per covered range, capped at 100.

    Returns:
        WeightedVDOT, all zeros when no effort falls in a range
    """
    ranged = get_best_efforts_by_distance(efforts)
    if not ranged:
        return WeightedVDOT(vdot=0.0, confidence=0, efforts_used=0, used_efforts=[])

    total_weight = sum(e.range_weight for e in ranged)
    weighted_sum = sum(calculate_vdot(e.distance, e.time) * e.range_weight for e in ranged)

    return WeightedVDOT(
        vdot=round(weighted_sum / total_weight, 1),
        confidence=min(100, len(ranged) * CONFIDENCE_PER_RANGE),
        efforts_used=len(ranged),
        used_efforts=ranged,
    )


# ============================================
# PERSONAL RECORDS
# ============================================

PR_DISTANCES: Mapping[str, float] = MappingProxyType({
    "1K": 1000,
    "1 Mile": 1609.34,
    "5K": 5000,
    "10K": 10000,
    "Half Marathon": 21097.5,
    "Marathon": 42195,
})

# Accepted distance window per PR as (min, max) fraction of the target
PR_TOLERANCES: Mapping[str, Tuple[float, float]] = MappingProxyType({
    "1K": (0.95, 1.15),
    "1 Mile": (0.95, 1.15),
    "5K": (0.95, 1.10),
    "10K": (0.95, 1.10),
    "Half Marathon": (0.98, 1.05),
    "Marathon": (0.98, 1.03),
})

DEFAULT_PR_TOLERANCE = (0.95, 1.10)


@dataclass(frozen=True)
class PersonalRecord:
    """Fastest run for a standard distance, time scaled to the exact distance."""

    distance: str  # PR name, e.g. "5K"
    distance_meters: float
    time: int  # seconds
    pace: float  # sec/km
    activity_id: object
    activity_name: str
    date: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "distance": self.distance,
            "distanceMeters": self.distance_meters,
            "time": self.time,
            "pace": round(self.pace, 1),
            "activityId": self.activity_id,
            "activityName": self.activity_name,
            "date": self.date.isoformat(),
        }


def find_personal_records(activities: Sequence[ActivityRecord]) -> List[PersonalRecord]:
    """
    Find the fastest run for each standard PR distance.

    A run qualifies for a distance when it falls inside that distance's
    tolerance window. Its moving time is scaled proportionally to the exact
    distance before comparing.

    Returns:
        One record per distance that has a qualifying run, in PR_DISTANCES order
    """
    runs = [a for a in activities if a.is_run and a.distance > 0 and a.moving_time > 0]
    records: List[PersonalRecord] = []

    for name, target in PR_DISTANCES.items():
        min_pct, max_pct = PR_TOLERANCES.get(name, DEFAULT_PR_TOLERANCE)
        low = target * min_pct
        high = target * max_pct

        best: Optional[PersonalRecord] = None
        for run in runs:
            if not low <= run.distance <= high:
                continue

            adjusted_time = run.moving_time * (target / run.distance)
            record = PersonalRecord(
                distance=name,
                distance_meters=target,
                time=round(adjusted_time),
                pace=adjusted_time / (target / 1000),
                activity_id=run.id,
                activity_name=run.name,
                date=run.start_date,
            )
            if best is None or record.time < best.time:
                best = record

        if best is not None:
            records.append(best)

    return records
