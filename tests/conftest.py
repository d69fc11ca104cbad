"""Shared fixtures for training insights tests."""

from datetime import datetime, timedelta
from itertools import count

import pytest

from training_insights.config import InsightsSettings
from training_insights.models.activity import ActivityRecord


# Fixed reference time so date windows are deterministic
NOW = datetime(2024, 6, 15, 12, 0, 0)

_ids = count(1)


def build_activity(
    days_ago: float = 0,
    distance: float = 10000,
    moving_time: float = 3000,
    average_heartrate=150,
    max_heartrate=None,
    type: str = "Run",
    name: str = "Morning Run",
    start_date: datetime = None,
    **extra,
) -> ActivityRecord:
    """Build an ActivityRecord relative to NOW."""
    return ActivityRecord(
        id=next(_ids),
        name=name,
        start_date=start_date or NOW - timedelta(days=days_ago),
        type=type,
        distance=distance,
        moving_time=moving_time,
        average_heartrate=average_heartrate,
        max_heartrate=max_heartrate,
        **extra,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_activity():
    """Factory fixture for activity records."""
    return build_activity


@pytest.fixture
def settings():
    """Settings with default values, isolated from the environment."""
    return InsightsSettings(_env_file=None)


@pytest.fixture
def raw_activity():
    """An upstream activity payload as returned by the activities endpoint."""
    return {
        "id": 12345,
        "name": "Tempo Run",
        "type": "Run",
        "sport_type": "Run",
        "start_date": "2024-06-10T06:30:00Z",
        "start_date_local": "2024-06-10T08:30:00Z",
        "distance": 10000.0,
        "moving_time": 2700,
        "elapsed_time": 2800,
        "total_elevation_gain": 85.0,
        "average_heartrate": 158.4,
        "max_heartrate": 176.0,
    }
