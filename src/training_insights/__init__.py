"""
Training Insights - running performance analytics.

Turns an activity history into fitness metrics, race predictions,
injury-risk signals and time-series aggregations.
"""

__version__ = "0.1.0"

from .config import InsightsSettings, configure_logging, get_settings
from .exceptions import (
    ActivityValidationError,
    ConfigurationError,
    ErrorCode,
    TrainingInsightsError,
    ValidationError,
    ZonesValidationError,
)
from .models import ActivityRecord, AthleteThresholds, parse_activities, thresholds_from_zones
from .services import PerformanceService

__all__ = [
    "__version__",
    "InsightsSettings",
    "configure_logging",
    "get_settings",
    "ActivityValidationError",
    "ConfigurationError",
    "ErrorCode",
    "TrainingInsightsError",
    "ValidationError",
    "ZonesValidationError",
    "ActivityRecord",
    "AthleteThresholds",
    "parse_activities",
    "thresholds_from_zones",
    "PerformanceService",
]
