"""Input data models."""

from .activity import RUN_TYPES, ActivityRecord, parse_activities, to_camel
from .athlete import (
    DEFAULT_MAX_HR,
    DEFAULT_REST_HR,
    DEFAULT_THRESHOLD_HR,
    AthleteThresholds,
    HRZoneBoundary,
    parse_zones,
    thresholds_from_zones,
)

__all__ = [
    "RUN_TYPES",
    "ActivityRecord",
    "parse_activities",
    "to_camel",
    "DEFAULT_MAX_HR",
    "DEFAULT_REST_HR",
    "DEFAULT_THRESHOLD_HR",
    "AthleteThresholds",
    "HRZoneBoundary",
    "parse_zones",
    "thresholds_from_zones",
]
