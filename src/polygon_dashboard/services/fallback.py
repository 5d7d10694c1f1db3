"""
Synthetic sample series.

Stands in for archive data when the archive cannot be reached. Values are
illustrative only: a daily sine wave around a base value plus jitter.
"""

import logging
import math
import random
from typing import List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import Point, Sample, TimeWindow
from ..processing.aggregator import round_half_away_from_zero


class SyntheticSeriesGenerator:
    """Generate hourly synthetic samples covering a time window."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        base_value: float = constants.FALLBACK_BASE_VALUE,
        amplitude: float = constants.FALLBACK_AMPLITUDE,
        jitter: float = constants.FALLBACK_JITTER,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize generator.

        Args:
            rng: Random source for the jitter (seed it for repeatable series)
            base_value: Centre of the sine wave
            amplitude: Sine wave amplitude
            jitter: Full width of the uniform noise band
            logger: Logger instance
        """
        self.rng = rng or random.Random()
        self.base_value = base_value
        self.amplitude = amplitude
        self.jitter = jitter
        self.logger = logger or logging.getLogger(__name__)

    def value_at(self, timestamp_ms: float) -> float:
        """Synthetic value for a Unix timestamp in milliseconds."""
        variation = math.sin(timestamp_ms / constants.FALLBACK_PERIOD_MS) * self.amplitude
        noise = (self.rng.random() - 0.5) * self.jitter
        return round_half_away_from_zero(self.base_value + variation + noise)

    def generate(self, point: Point, window: TimeWindow) -> List[Sample]:
        """
        Build one sample per hour from window start to window end.

        Args:
            point: Coordinate stamped on every sample
            window: Window to cover; an instant window yields one sample

        Returns:
            Samples flagged as synthetic
        """
        samples = [
            Sample(
                timestamp=step,
                value=self.value_at(step.timestamp() * 1000),
                latitude=point.lat,
                longitude=point.lng,
                synthetic=True,
            )
            for step in DateUtils.hourly_steps(window.start, window.end)
        ]
        self.logger.debug(f"Generated {len(samples)} synthetic samples")
        return samples
