"""
Sample aggregation module.

Reduces a metric time series to one representative value for a time window.
"""

import logging
import math
import statistics
from typing import Iterable, List, Optional, Sequence

from ..core import constants
from ..models import Sample, TimeWindow

# Returned when a window holds no samples. Indistinguishable from a genuine
# zero reading; callers needing the difference should check select() first.
NO_DATA_VALUE = 0.0


def round_half_away_from_zero(value: float, decimals: int = constants.VALUE_DECIMALS) -> float:
    """Round on the scaled value, moving .5 away from zero (unlike round())."""
    scale = 10 ** decimals
    scaled = math.floor(abs(value) * scale + 0.5)
    return math.copysign(scaled, value) / scale if scaled else 0.0


class SampleAggregator:
    """Average sample values inside a time window."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize sample aggregator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def select(samples: Iterable[Sample], window: TimeWindow) -> List[Sample]:
        """Return the samples whose timestamp lies within the window, bounds included."""
        return [sample for sample in samples if window.start <= sample.timestamp <= window.end]

    def average(self, samples: Sequence[Sample]) -> float:
        """
        Arithmetic mean of the sample values, rounded to one decimal.

        Args:
            samples: Samples to average (not filtered)

        Returns:
            Rounded mean, or NO_DATA_VALUE when there are no samples
        """
        if not samples:
            return NO_DATA_VALUE

        mean = statistics.mean(sample.value for sample in samples)
        return round_half_away_from_zero(mean)

    def aggregate(self, samples: Sequence[Sample], window: TimeWindow) -> float:
        """
        Average the samples that fall inside the window.

        Args:
            samples: Raw time series; left untouched
            window: Inclusive time window

        Returns:
            Mean value rounded to one decimal, or NO_DATA_VALUE if the window
            holds no samples
        """
        selected = self.select(samples, window)

        if not selected:
            self.logger.debug(
                f"No samples between {window.start.isoformat()} and "
                f"{window.end.isoformat()} ({len(samples)} available)"
            )
            return NO_DATA_VALUE

        value = self.average(selected)
        self.logger.debug(f"Aggregated {len(selected)} of {len(samples)} samples to {value}")
        return value


def aggregate(samples: Sequence[Sample], window: TimeWindow) -> float:
    """Module-level shortcut for SampleAggregator().aggregate()."""
    return SampleAggregator().aggregate(samples, window)
