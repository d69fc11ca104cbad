"""Tests for physiological formulas."""

import math

import pytest

from training_insights.metrics.physiology import (
    calculate_hrtss,
    calculate_trimp,
    calculate_vdot,
    estimate_vo2max_from_hr,
    get_training_paces,
    predict_from_vdot,
    race_intensity,
    riegel_prediction,
)


class TestVDOT:
    """Tests for Daniels' VDOT calculation."""

    def test_5k_in_20_minutes(self):
        """A 20:00 5K gives a VDOT around 50."""
        vdot = calculate_vdot(5000, 1200)
        assert vdot == pytest.approx(49.8, abs=0.1), f"Expected ~49.8, got {vdot}"
        assert 40 <= vdot <= 55

    def test_rounded_to_one_decimal(self):
        vdot = calculate_vdot(10000, 2580)
        assert vdot == round(vdot, 1)

    def test_decreases_with_time(self):
        """Slower times for the same distance mean lower VDOT."""
        values = [calculate_vdot(10000, t) for t in (2400, 2700, 3000, 3300)]
        assert values == sorted(values, reverse=True)
        assert len(set(values)) == len(values)

    def test_increases_with_distance(self):
        """Covering more distance in the same time means higher VDOT."""
        values = [calculate_vdot(d, 1800) for d in (5000, 6000, 7000, 8000)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_non_positive_time_is_nan(self):
        assert math.isnan(calculate_vdot(5000, 0))
        assert math.isnan(calculate_vdot(5000, -10))


class TestRiegel:
    """Tests for Riegel race time extrapolation."""

    def test_5k_to_10k(self):
        """20:00 5K predicts about 41:25 for 10K with exponent 1.05."""
        predicted = riegel_prediction(1200, 5000, 10000, 1.05)
        assert predicted == pytest.approx(1200 * 2 ** 1.05)
        assert predicted == pytest.approx(2484.6, abs=0.5)
        assert predicted > 2400

    def test_same_distance_returns_known_time(self):
        assert riegel_prediction(1500, 5000, 5000) == pytest.approx(1500)

    def test_higher_exponent_is_slower(self):
        assert riegel_prediction(1200, 5000, 21097.5, 1.06) > riegel_prediction(
            1200, 5000, 21097.5, 1.05
        )

    def test_zero_known_distance_is_nan(self):
        assert math.isnan(riegel_prediction(1200, 0, 10000))


class TestPredictFromVDOT:
    """Tests for VDOT-based race predictions."""

    def test_returns_whole_seconds(self):
        assert isinstance(predict_from_vdot(50, 10000), int)

    def test_longer_races_take_longer(self):
        times = [predict_from_vdot(50, d) for d in (5000, 10000, 21097.5, 42195)]
        assert times == sorted(times)

    def test_higher_vdot_is_faster(self):
        assert predict_from_vdot(55, 10000) < predict_from_vdot(45, 10000)

    def test_plausible_5k_for_vdot_50(self):
        """VDOT 50 should predict a 5K between 16:40 and 21:40."""
        seconds = predict_from_vdot(50, 5000)
        assert 1000 < seconds < 1300, f"Expected 1000-1300s, got {seconds}s"

    def test_degenerate_inputs_return_zero(self):
        assert predict_from_vdot(-10, 5000) == 0
        assert predict_from_vdot(50, 0) == 0

    def test_intensity_at_band_edges(self):
        """Each band's upper edge: 5K at 94%, 10K at 90%, half at 85%, marathon at 80%."""
        assert race_intensity(5000) == pytest.approx(0.94)
        assert race_intensity(10000) == pytest.approx(0.90)
        assert race_intensity(21097) == pytest.approx(0.85)
        assert race_intensity(42195) == pytest.approx(0.80)

    def test_intensity_steps_down_past_band_edge(self):
        """Just past 5K the next band starts below the 5K ceiling."""
        assert race_intensity(5000.5) < race_intensity(5000)


class TestTrainingPaces:
    """Tests for VDOT training paces."""

    def test_paces_are_ordered(self):
        """Faster intensities give lower sec/km."""
        paces = get_training_paces(50)

        def seconds(pace):
            minutes, secs = pace.split(":")
            return int(minutes) * 60 + int(secs)

        assert seconds(paces.easy_max) > seconds(paces.easy_min)
        assert seconds(paces.easy_min) > seconds(paces.marathon)
        assert seconds(paces.marathon) > seconds(paces.threshold)
        assert seconds(paces.threshold) > seconds(paces.interval)
        assert seconds(paces.interval) > seconds(paces.repetition)

    def test_format(self):
        paces = get_training_paces(50)
        for pace in (paces.marathon, paces.threshold, paces.interval):
            minutes, secs = pace.split(":")
            assert minutes.isdigit()
            assert len(secs) == 2 and 0 <= int(secs) < 60

    def test_to_dict_shape(self):
        data = get_training_paces(45).to_dict()
        assert set(data) == {"easy", "marathon", "threshold", "interval", "repetition"}
        assert set(data["easy"]) == {"min", "max"}


class TestHRTSS:
    """Tests for heart rate TSS."""

    def test_one_hour_at_threshold_is_100(self):
        tss = calculate_hrtss(3600, 165, 165, 190, 60)
        assert tss == 100, f"Expected 100, got {tss}"

    def test_scales_with_duration(self):
        assert calculate_hrtss(7200, 165, 165, 190, 60) == 200

    def test_below_threshold_is_lower(self):
        assert calculate_hrtss(3600, 140, 165, 190, 60) < 100

    def test_degenerate_anchors_return_zero(self):
        """max or threshold not above rest would divide by zero."""
        assert calculate_hrtss(3600, 150, 165, 60, 60) == 0
        assert calculate_hrtss(3600, 150, 60, 190, 60) == 0

    def test_zero_duration(self):
        assert calculate_hrtss(0, 150, 165, 190) == 0

    def test_hr_below_rest_is_clamped(self):
        assert calculate_hrtss(3600, 50, 165, 190, 60) == 0


class TestTRIMP:
    """Tests for Banister TRIMP."""

    def test_female_coefficient_is_lower(self):
        male = calculate_trimp(60, 150, 190, 60, gender="male")
        female = calculate_trimp(60, 150, 190, 60, gender="female")
        assert female < male

    def test_increases_with_intensity(self):
        assert calculate_trimp(60, 170, 190) > calculate_trimp(60, 130, 190)

    def test_invalid_reserve(self):
        assert calculate_trimp(60, 150, 60, 60) == 0


class TestVO2maxFromHR:
    """Tests for the heart-rate based VO2max estimate."""

    def test_plausible_value(self):
        vo2max = estimate_vo2max_from_hr(300, 155, 190, 60)
        assert 40 < vo2max < 75, f"Expected 40-75, got {vo2max}"

    def test_invalid_inputs(self):
        assert estimate_vo2max_from_hr(0, 150, 190) == 0
        assert estimate_vo2max_from_hr(300, 55, 190, 60) == 0
        assert estimate_vo2max_from_hr(300, 150, 60, 60) == 0
