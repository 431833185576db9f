"""Tests for daily rate calculation under each estimation method."""

from __future__ import annotations

from datetime import datetime

import pytest

from repscale.tracking.models import EstimationMethod, WeightEntry
from repscale.tracking.rates import (
    KCAL_PER_KG,
    calculate_rate,
    eating_habits_rate,
    goal_adherence_rate,
    weight_trend_rate,
)
from tests.conftest import NOW, log_on, weight_on


class TestWeightTrendRate:
    """Tests for the 30-day two-point weight trend."""

    def test_two_point_slope(self) -> None:
        """80 kg ten days ago and 78 kg today is -0.2 kg/day."""
        weights = [weight_on(10, 80.0), weight_on(0, 78.0)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.2)

    def test_uses_only_endpoints(self) -> None:
        """Samples in between do not affect the slope."""
        weights = [weight_on(10, 80.0), weight_on(6, 85.0), weight_on(3, 70.0), weight_on(0, 78.0)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.2)

    def test_unsorted_input(self) -> None:
        """Input order does not matter."""
        weights = [weight_on(0, 78.0), weight_on(10, 80.0)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.2)

    def test_single_entry_is_none(self) -> None:
        assert weight_trend_rate([weight_on(3, 80.0)], NOW) is None

    def test_empty_is_none(self) -> None:
        assert weight_trend_rate([], NOW) is None

    def test_same_day_entries_are_none(self) -> None:
        """Two samples on one calendar day span zero days."""
        weights = [weight_on(2, 80.0, hour=7), weight_on(2, 79.5, hour=21)]
        assert weight_trend_rate(weights, NOW) is None

    def test_same_object_twice_is_none(self) -> None:
        """A repeated object is one sample, not two."""
        entry = weight_on(5, 80.0)
        assert weight_trend_rate([entry, entry], NOW) is None

    def test_equal_values_are_distinct_samples(self) -> None:
        """Identical weights on different days give a zero rate, not None."""
        weights = [weight_on(10, 80.0), weight_on(0, 80.0)]
        assert weight_trend_rate(weights, NOW) == 0.0

    def test_excludes_entries_older_than_30_days(self) -> None:
        """Only the last 30 days are considered."""
        weights = [weight_on(45, 90.0), weight_on(10, 80.0), weight_on(0, 78.0)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.2)

    def test_window_boundary_is_inclusive_of_timestamp(self) -> None:
        """An entry exactly 30 days before now is inside the window."""
        boundary = WeightEntry(date=datetime(2026, 9, 19, 12, 0), weight=83.0)
        weights = [boundary, weight_on(0, 80.0)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.1)

    def test_entry_earlier_on_boundary_day_is_excluded(self) -> None:
        before = WeightEntry(date=datetime(2026, 9, 19, 8, 0), weight=83.0)
        assert weight_trend_rate([before, weight_on(0, 80.0)], NOW) is None

    def test_day_count_uses_calendar_days(self) -> None:
        """Late evening to early morning the next day counts as one day."""
        weights = [weight_on(1, 80.0, hour=23), weight_on(0, 79.9, hour=6)]
        assert weight_trend_rate(weights, NOW) == pytest.approx(-0.1)


class TestEatingHabitsRate:
    """Tests for the rate implied by average intake over the last week."""

    def test_average_against_maintenance(self) -> None:
        logs = [log_on(d, 2000) for d in range(1, 8)]
        expected = (2000 - 2500) / KCAL_PER_KG
        assert eating_habits_rate(logs, 2500, NOW) == pytest.approx(expected)

    def test_excludes_today(self) -> None:
        """Today's partial log is ignored."""
        logs = [log_on(1, 2000), log_on(0, 100)]
        expected = (2000 - 2500) / KCAL_PER_KG
        assert eating_habits_rate(logs, 2500, NOW) == pytest.approx(expected)

    def test_excludes_logs_older_than_seven_days(self) -> None:
        logs = [log_on(8, 5000), log_on(7, 3000), log_on(1, 2000)]
        expected = (2500 - 2500) / KCAL_PER_KG
        assert eating_habits_rate(logs, 2500, NOW) == pytest.approx(expected)

    def test_only_today_is_none(self) -> None:
        assert eating_habits_rate([log_on(0, 1800)], 2500, NOW) is None

    def test_no_logs_is_none(self) -> None:
        assert eating_habits_rate([], 2500, NOW) is None

    def test_zero_intake_days_count(self) -> None:
        """Unlike the maintenance estimate, zero days are averaged in."""
        logs = [log_on(1, 0), log_on(2, 3000)]
        expected = (1500 - 2500) / KCAL_PER_KG
        assert eating_habits_rate(logs, 2500, NOW) == pytest.approx(expected)


class TestGoalAdherenceRate:
    """Tests for the rate assuming the daily goal is always met."""

    def test_deficit(self) -> None:
        assert goal_adherence_rate(2000, 2500) == pytest.approx(-500 / 7700)

    def test_surplus(self) -> None:
        assert goal_adherence_rate(2770, 2000) == pytest.approx(0.1)

    def test_equal_is_zero(self) -> None:
        assert goal_adherence_rate(2500, 2500) == 0.0


class TestCalculateRate:
    """Tests for method dispatch."""

    def test_dispatches_weight_trend(self) -> None:
        weights = [weight_on(10, 80.0), weight_on(0, 78.0)]
        rate = calculate_rate(EstimationMethod.WEIGHT_TREND_30_DAY, weights, [], 2500, 2000, NOW)
        assert rate == pytest.approx(-0.2)

    def test_dispatches_eating_habits(self) -> None:
        logs = [log_on(1, 3270)]
        rate = calculate_rate(EstimationMethod.CURRENT_EATING_HABITS, [], logs, 2500, 2000, NOW)
        assert rate == pytest.approx(0.1)

    def test_goal_adherence_needs_no_history(self) -> None:
        rate = calculate_rate(EstimationMethod.PERFECT_GOAL_ADHERENCE, [], [], 2500, 2000, NOW)
        assert rate == pytest.approx(-500 / 7700)

    def test_trend_ignores_logs(self) -> None:
        logs = [log_on(d, 1000) for d in range(1, 8)]
        rate = calculate_rate(EstimationMethod.WEIGHT_TREND_30_DAY, [], logs, 2500, 2000, NOW)
        assert rate is None

    def test_unknown_method_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown estimation method"):
            calculate_rate(3, [], [], 2500, 2000, NOW)  # type: ignore[arg-type]
