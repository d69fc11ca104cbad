"""Tests for aerobic efficiency."""

from datetime import datetime, timedelta

import pytest

from training_insights.metrics.efficiency import (
    EfficiencyPoint,
    PaceHRPoint,
    calculate_aerobic_efficiency,
    get_efficiency_trend,
    pace_hr_points,
    pace_hr_trend,
)


def point(efficiency, day=0):
    return EfficiencyPoint(
        date=datetime(2024, 1, 1) + timedelta(days=day),
        activity_name="Run",
        pace=300.0,
        avg_hr=150.0,
        efficiency=efficiency,
        pace_hr_ratio=2.0,
    )


class TestAerobicEfficiency:
    """Tests for meters-per-heartbeat calculation."""

    def test_meters_per_heartbeat(self, make_activity):
        """10 km in 50 min at 150 bpm: 10000 / 7500 beats = 1.33 m/beat."""
        activity = make_activity(distance=10000, moving_time=3000, average_heartrate=150)
        result = calculate_aerobic_efficiency([activity])

        assert len(result) == 1
        assert result[0].efficiency == 1.33
        assert result[0].pace == pytest.approx(300)
        assert result[0].pace_hr_ratio == 2.0

    def test_filters(self, make_activity):
        activities = [
            make_activity(distance=2500, moving_time=750),
            make_activity(average_heartrate=None),
            make_activity(average_heartrate=0),
            make_activity(type="Ride"),
        ]
        assert calculate_aerobic_efficiency(activities) == []

    def test_chronological_and_limited(self, make_activity):
        activities = [make_activity(days_ago=d) for d in range(30)]
        result = calculate_aerobic_efficiency(activities)

        assert len(result) == 20
        dates = [p.date for p in result]
        assert dates == sorted(dates)
        assert dates[-1] == max(a.start_date for a in activities)

    def test_custom_limit(self, make_activity):
        activities = [make_activity(days_ago=d) for d in range(8)]
        assert len(calculate_aerobic_efficiency(activities, limit=5)) == 5

    def test_to_dict(self, make_activity):
        data = calculate_aerobic_efficiency([make_activity()])[0].to_dict()
        assert set(data) == {"date", "activityName", "pace", "avgHR", "efficiency", "paceHRRatio"}


class TestEfficiencyTrend:
    """Tests for the recent-vs-previous efficiency trend."""

    def test_too_few_points(self):
        assert get_efficiency_trend([point(1.2, d) for d in range(5)]) is None
        assert get_efficiency_trend([]) is None

    def test_improving(self):
        points = [point(1.0, d) for d in range(5)] + [point(1.1, d) for d in range(5, 10)]
        trend = get_efficiency_trend(points)

        assert trend.current == 1.1
        assert trend.previous == 1.0
        assert trend.change == 10.0
        assert trend.improving is True

    def test_declining(self):
        points = [point(1.2, d) for d in range(5)] + [point(1.0, d) for d in range(5, 10)]
        trend = get_efficiency_trend(points)
        assert trend.change < 0
        assert trend.improving is False

    def test_six_points_uses_single_older_point(self):
        points = [point(1.0, 0)] + [point(1.2, d) for d in range(1, 6)]
        trend = get_efficiency_trend(points)
        assert trend.previous == 1.0
        assert trend.change == 20.0

    def test_only_last_ten_points_count(self):
        points = [point(5.0, d) for d in range(5)] + [point(1.0, d) for d in range(5, 15)]
        trend = get_efficiency_trend(points)
        assert trend.previous == 1.0
        assert trend.change == 0.0
        assert trend.improving is False

    def test_zero_older_mean(self):
        points = [point(0.0, d) for d in range(5)] + [point(1.0, d) for d in range(5, 10)]
        assert get_efficiency_trend(points) is None


def pace_hr_point(efficiency, day=0):
    return PaceHRPoint(
        date=datetime(2024, 1, 1) + timedelta(days=day),
        activity_name="Run",
        pace=300.0,
        hr=150.0,
        efficiency=efficiency,
    )


class TestPaceHRPoints:
    """Tests for the pace vs. heart rate series."""

    def test_speed_per_bpm(self, make_activity, now):
        """10 km in 50 min at 150 bpm: 3.33 m/s / 150 bpm * 1000 = 22.22."""
        activity = make_activity(distance=10000, moving_time=3000, average_heartrate=150)
        result = pace_hr_points([activity])

        assert len(result) == 1
        assert result[0].efficiency == pytest.approx(22.222, abs=0.001)
        assert result[0].to_dict() == {
            "date": "2024-06-15",
            "pace": 300.0,
            "hr": 150,
            "efficiency": 22.22,
            "activityName": "Morning Run",
        }

    def test_filters(self, make_activity):
        activities = [
            make_activity(distance=3000, moving_time=900),
            make_activity(average_heartrate=100),
            make_activity(average_heartrate=None),
            make_activity(type="Ride", distance=30000),
            make_activity(moving_time=0),
        ]
        assert pace_hr_points(activities) == []

    def test_most_recent_oldest_first(self, make_activity):
        activities = [make_activity(days_ago=day) for day in range(60)]
        result = pace_hr_points(activities)

        assert len(result) == 50
        assert result[0].date < result[-1].date
        assert result[-1].date == activities[0].start_date


class TestPaceHRTrend:
    """Tests for the first-10 vs. last-10 efficiency change."""

    def test_percent_change(self):
        points = [pace_hr_point(20.0, day) for day in range(10)]
        points += [pace_hr_point(22.0, day) for day in range(10, 20)]

        assert pace_hr_trend(points) == pytest.approx(10.0)

    def test_overlapping_windows(self):
        """With five points both windows hold the same runs."""
        points = [pace_hr_point(20.0 + day, day) for day in range(5)]
        assert pace_hr_trend(points) == 0

    def test_no_points(self):
        assert pace_hr_trend([]) == 0
