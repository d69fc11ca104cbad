"""Utility modules for training insights."""

from .formatting import (
    format_distance,
    format_duration,
    format_pace,
    format_race_time,
    velocity_to_pace,
)

__all__ = [
    "format_distance",
    "format_duration",
    "format_pace",
    "format_race_time",
    "velocity_to_pace",
]
