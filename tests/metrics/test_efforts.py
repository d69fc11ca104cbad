"""Tests for best-effort extraction, weighted VDOT and personal records."""

from datetime import datetime

import pytest

from training_insights.metrics.efforts import (
    DISTANCE_RANGES,
    PR_DISTANCES,
    BestEffort,
    calculate_weighted_vdot,
    find_best_efforts,
    find_distance_range,
    find_personal_records,
    get_best_efforts_by_distance,
)
from training_insights.metrics.physiology import calculate_vdot


def effort(distance, time, activity_id=1):
    return BestEffort(
        activity_id=activity_id,
        activity_name="Run",
        date=datetime(2024, 6, 1, 8, 0),
        distance=distance,
        time=time,
        pace=time / (distance / 1000),
    )


class TestFindBestEfforts:
    """Tests for best effort selection."""

    def test_sorted_by_pace(self, make_activity):
        activities = [
            make_activity(distance=10000, moving_time=3000),
            make_activity(distance=5000, moving_time=1200),
            make_activity(distance=8000, moving_time=2800),
        ]
        efforts = find_best_efforts(activities)
        paces = [e.pace for e in efforts]
        assert paces == sorted(paces)
        assert efforts[0].pace == pytest.approx(240)

    def test_filters_runs_and_distance(self, make_activity):
        activities = [
            make_activity(distance=2000, moving_time=480),
            make_activity(distance=40000, moving_time=4800, type="Ride"),
            make_activity(distance=5000, moving_time=1500, type="VirtualRun"),
            make_activity(distance=5000, moving_time=0),
        ]
        efforts = find_best_efforts(activities)
        assert len(efforts) == 1
        assert efforts[0].distance == 5000

    def test_sport_type_counts_as_run(self, make_activity):
        activity = make_activity(type="Workout", sport_type="Run")
        assert len(find_best_efforts([activity])) == 1

    def test_limit(self, make_activity):
        activities = [make_activity(moving_time=3000 + i) for i in range(15)]
        assert len(find_best_efforts(activities)) == 10
        assert len(find_best_efforts(activities, limit=3)) == 3

    def test_empty(self):
        assert find_best_efforts([]) == []


class TestBestEffortsByDistance:
    """Tests for grouping efforts into distance ranges."""

    def test_ranges_are_disjoint(self):
        ordered = sorted(DISTANCE_RANGES, key=lambda r: r.min_distance)
        for lower, upper in zip(ordered, ordered[1:]):
            assert lower.max_distance < upper.min_distance

    def test_first_matching_range(self):
        assert find_distance_range(5000).name == "5K"
        assert find_distance_range(21097.5).name == "21K"
        assert find_distance_range(7000) is None

    def test_keeps_fastest_per_range(self):
        efforts = [effort(5000, 1300, 1), effort(5000, 1200, 2), effort(5200, 1250, 3)]
        ranged = get_best_efforts_by_distance(efforts)

        assert len(ranged) == 1
        assert ranged[0].activity_id == 2
        assert ranged[0].range_name == "5K"
        assert ranged[0].range_weight == 1.0

    def test_at_most_one_effort_per_range(self):
        efforts = [
            effort(d, d / 1000 * p, i)
            for i, (d, p) in enumerate(
                [(d, p) for d in (5000, 10000, 15000, 21097, 30000, 42195, 7000) for p in (240, 260, 280)]
            )
        ]
        ranged = get_best_efforts_by_distance(efforts)
        names = [e.range_name for e in ranged]

        assert len(names) == len(set(names))
        assert len(ranged) <= len(DISTANCE_RANGES)
        assert all(e.pace == pytest.approx(240) for e in ranged)

    def test_out_of_range_dropped(self):
        assert get_best_efforts_by_distance([effort(7000, 2000), effort(3000, 800)]) == []

    def test_to_dict(self):
        data = get_best_efforts_by_distance([effort(10000, 2400)])[0].to_dict()
        assert data["rangeName"] == "10K"
        assert data["rangeWeight"] == 1.5
        assert data["activityId"] == 1
        assert data["pace"] == 240


class TestWeightedVDOT:
    """Tests for the range-weighted VDOT."""

    def test_no_efforts(self):
        result = calculate_weighted_vdot([])
        assert (result.vdot, result.confidence, result.efforts_used) == (0, 0, 0)
        assert result.used_efforts == []

    def test_no_efforts_in_range(self):
        result = calculate_weighted_vdot([effort(7000, 2000)])
        assert result.vdot == 0
        assert result.confidence == 0

    def test_single_effort(self):
        result = calculate_weighted_vdot([effort(5000, 1200)])
        assert result.vdot == calculate_vdot(5000, 1200)
        assert result.confidence == 25
        assert result.efforts_used == 1

    def test_weighted_average(self):
        """10K (weight 1.5) pulls the average toward its own VDOT."""
        five_k = effort(5000, 1200)
        ten_k = effort(10000, 2700)
        result = calculate_weighted_vdot([five_k, ten_k])

        expected = (calculate_vdot(5000, 1200) * 1 + calculate_vdot(10000, 2700) * 1.5) / 2.5
        assert result.vdot == pytest.approx(round(expected, 1))
        assert result.confidence == 50

    def test_confidence_capped(self):
        efforts = [effort(d, d / 1000 * 250) for d in (5000, 10000, 15000, 21097, 30000)]
        assert calculate_weighted_vdot(efforts).confidence == 100


class TestPersonalRecords:
    """Tests for standard-distance personal records."""

    def test_time_scaled_to_exact_distance(self, make_activity):
        activity = make_activity(distance=5100, moving_time=1224)
        records = find_personal_records([activity])

        five_k = next(r for r in records if r.distance == "5K")
        assert five_k.distance_meters == 5000
        assert five_k.time == 1200
        assert five_k.pace == pytest.approx(240)

    def test_fastest_wins(self, make_activity):
        activities = [
            make_activity(distance=10000, moving_time=2700, name="Slow"),
            make_activity(distance=10050, moving_time=2500, name="Fast"),
        ]
        ten_k = next(r for r in find_personal_records(activities) if r.distance == "10K")
        assert ten_k.activity_name == "Fast"

    def test_tolerance_windows(self, make_activity):
        """A 5.6 km run is outside the 5K window (max 110%)."""
        records = find_personal_records([make_activity(distance=5600, moving_time=1500)])
        assert all(r.distance != "5K" for r in records)

    def test_marathon_window_is_tight(self, make_activity):
        records = find_personal_records([make_activity(distance=44000, moving_time=12600)])
        assert records == []

    def test_order_follows_distances(self, make_activity):
        activities = [
            make_activity(distance=42195, moving_time=12600),
            make_activity(distance=1000, moving_time=200),
            make_activity(distance=21100, moving_time=5400),
        ]
        names = [r.distance for r in find_personal_records(activities)]
        assert names == [n for n in PR_DISTANCES if n in names]
        assert names == ["1K", "Half Marathon", "Marathon"]

    def test_non_runs_ignored(self, make_activity):
        assert find_personal_records([make_activity(distance=10000, type="Ride")]) == []

    def test_to_dict(self, make_activity):
        record = find_personal_records([make_activity(distance=1000, moving_time=210)])[0]
        data = record.to_dict()
        assert data["distance"] == "1K"
        assert data["distanceMeters"] == 1000
        assert data["time"] == 210
