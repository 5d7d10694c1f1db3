"""
Tests for the sample aggregator.

Covers window filtering, the empty-window sentinel and rounding.
"""

import pytest  # type: ignore
from datetime import datetime, timedelta

import pytz

from src.polygon_dashboard.models import Sample, TimeWindow
from src.polygon_dashboard.processing import SampleAggregator, aggregate, NO_DATA_VALUE
from src.polygon_dashboard.processing.aggregator import round_half_away_from_zero

START = datetime(2024, 6, 1, 0, 0, tzinfo=pytz.UTC)


def hourly(values, start=START):
    """Build hourly samples from a list of values."""
    return [
        Sample(timestamp=start + timedelta(hours=i), value=v, latitude=52.5, longitude=13.4)
        for i, v in enumerate(values)
    ]


class TestSampleAggregator:
    """Test cases for SampleAggregator."""

    @pytest.fixture
    def aggregator(self):
        """Create aggregator instance."""
        return SampleAggregator()

    def test_empty_samples_return_zero(self, aggregator):
        window = TimeWindow(start=START, end=START + timedelta(days=1))
        assert aggregator.aggregate([], window) == 0
        assert aggregate([], window) == NO_DATA_VALUE

    def test_no_sample_in_window_returns_zero(self, aggregator):
        samples = hourly([10.0, 20.0])
        window = TimeWindow(start=START + timedelta(days=2), end=START + timedelta(days=3))
        assert aggregator.aggregate(samples, window) == 0

    def test_constant_series_returns_constant_for_any_width(self, aggregator):
        samples = hourly([22.3] * 48)
        for hours in (0, 1, 5, 24, 47, 100):
            window = TimeWindow(start=START, end=START + timedelta(hours=hours))
            assert aggregator.aggregate(samples, window) == 22.3

    def test_bounds_are_inclusive(self, aggregator):
        samples = hourly([10.0, 20.0, 30.0, 40.0])
        window = TimeWindow(start=START + timedelta(hours=1), end=START + timedelta(hours=2))
        assert aggregator.aggregate(samples, window) == 25.0

    def test_instant_window_selects_exact_timestamp(self, aggregator):
        samples = hourly([10.0, 20.0, 30.0])
        window = TimeWindow.instant(START + timedelta(hours=2))
        assert aggregator.aggregate(samples, window) == 30.0

    def test_instant_between_samples_has_no_data(self, aggregator):
        samples = hourly([10.0, 20.0])
        window = TimeWindow.instant(START + timedelta(minutes=30))
        assert aggregator.aggregate(samples, window) == 0

    def test_mean_is_rounded_to_one_decimal(self, aggregator):
        samples = hourly([10.0, 10.0, 11.0])
        window = TimeWindow(start=START, end=START + timedelta(hours=2))
        assert aggregator.aggregate(samples, window) == 10.3

    def test_half_rounds_away_from_zero(self, aggregator):
        window = TimeWindow(start=START, end=START + timedelta(hours=1))
        assert aggregator.aggregate(hourly([10.0, 10.5]), window) == 10.3
        assert aggregator.aggregate(hourly([-10.0, -10.5]), window) == -10.3

    def test_input_is_not_mutated(self, aggregator):
        samples = hourly([5.0, 1.0, 3.0])
        snapshot = list(samples)
        aggregator.aggregate(samples, TimeWindow(start=START, end=START + timedelta(hours=1)))
        assert samples == snapshot

    def test_naive_window_is_treated_as_utc(self, aggregator):
        samples = hourly([8.0, 12.0])
        window = TimeWindow(start=datetime(2024, 6, 1, 0, 0), end=datetime(2024, 6, 1, 1, 0))
        assert aggregator.aggregate(samples, window) == 10.0

    def test_average_without_filtering(self, aggregator):
        assert aggregator.average(hourly([1.0, 2.0])) == 1.5
        assert aggregator.average([]) == 0


class TestRounding:
    """Test half-away-from-zero rounding."""

    @pytest.mark.parametrize("value,expected", [
        (0.25, 0.3),
        (-0.25, -0.3),
        (1.04, 1.0),
        (-1.04, -1.0),
        (0.0, 0.0),
        (-0.01, 0.0),
    ])
    def test_round_half_away_from_zero(self, value, expected):
        assert round_half_away_from_zero(value) == expected


class TestTimeWindow:
    """Test TimeWindow invariants."""

    def test_start_after_end_is_rejected(self):
        with pytest.raises(ValueError):
            TimeWindow(start=START + timedelta(hours=1), end=START)

    def test_instant_window(self):
        window = TimeWindow.instant(START)
        assert window.is_instant
        assert window.contains(START)
        assert not window.contains(START + timedelta(seconds=1))
