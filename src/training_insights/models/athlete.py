"""Athlete heart rate zones and the thresholds derived from them."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..exceptions import ZonesValidationError


# Fallbacks when the athlete has no zones configured upstream
DEFAULT_MAX_HR = 190
DEFAULT_THRESHOLD_HR = 165
DEFAULT_REST_HR = 60

# Upstream zones stop at the top zone's floor; max HR sits roughly above it
TOP_ZONE_MAX_HR_OFFSET = 20

# Zone 4 (index 3) starts near lactate threshold
THRESHOLD_ZONE_INDEX = 3


class HRZoneBoundary(BaseModel):
    """One heart rate zone as configured upstream (max is -1 for the open top zone)."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(..., description="Lower bound in bpm")
    max: int = Field(-1, description="Upper bound in bpm, -1 when open")


@dataclass(frozen=True)
class AthleteThresholds:
    """Heart rate anchors used by the load models."""

    max_hr: float
    threshold_hr: float
    rest_hr: float = DEFAULT_REST_HR

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "maxHR": self.max_hr,
            "thresholdHR": self.threshold_hr,
            "restHR": self.rest_hr,
        }


def parse_zones(zones: Optional[Iterable[Union[HRZoneBoundary, dict]]]) -> List[HRZoneBoundary]:
    """
    Validate upstream zone boundaries.

    Raises:
        ZonesValidationError: If a zone is malformed
    """
    if not zones:
        return []

    parsed = []
    for zone in zones:
        if isinstance(zone, HRZoneBoundary):
            parsed.append(zone)
            continue
        try:
            parsed.append(HRZoneBoundary.model_validate(zone))
        except PydanticValidationError as e:
            raise ZonesValidationError(
                "Invalid heart rate zone",
                details={"zone": zone, "errors": e.errors(include_url=False)},
            ) from e
    return parsed


def thresholds_from_zones(
    zones: Optional[Iterable[Union[HRZoneBoundary, dict]]],
    default_max_hr: float = DEFAULT_MAX_HR,
    default_threshold_hr: float = DEFAULT_THRESHOLD_HR,
    rest_hr: float = DEFAULT_REST_HR,
) -> AthleteThresholds:
    """
    Derive max and threshold heart rate from upstream zone boundaries.

    Heuristics:
    - Max HR: top zone's lower bound + 20 bpm (when that bound is positive)
    - Threshold HR: lower bound of zone 4 (when at least 4 zones exist)

    Either value falls back to its default when the zones don't provide it.

    Args:
        zones: Ordered zone boundaries, lowest first (may be None or empty)
        default_max_hr: Fallback maximum heart rate
        default_threshold_hr: Fallback threshold heart rate
        rest_hr: Resting heart rate (not derivable from zones)

    Returns:
        AthleteThresholds
    """
    parsed = parse_zones(zones)

    max_hr = default_max_hr
    threshold_hr = default_threshold_hr

    if parsed:
        top_zone = parsed[-1]
        if top_zone.min > 0:
            max_hr = top_zone.min + TOP_ZONE_MAX_HR_OFFSET
        if len(parsed) > THRESHOLD_ZONE_INDEX:
            threshold_hr = parsed[THRESHOLD_ZONE_INDEX].min

    return AthleteThresholds(max_hr=max_hr, threshold_hr=threshold_hr, rest_hr=rest_hr)
