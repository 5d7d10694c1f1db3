"""
Processing module for the polygon dashboard.

Provides aggregation, colour classification, rule validation and geometry.
"""

import logging
from typing import Optional, Sequence

from .aggregator import SampleAggregator, aggregate, NO_DATA_VALUE
from .classifier import ColorClassifier, classify, evaluate_rule, sort_rules
from .geometry import centroid
from .validator import RuleValidator
from .colors import generate_palette, contrast_color
from ..models import DataSource, Point, Polygon, Rule, Sample, TimeWindow


class ColorProcessor:
    """
    Unified processor combining centroid, aggregation and classification.

    This class provides a convenient interface to the whole value-to-colour
    computation for one polygon.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize colour processor.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.aggregator = SampleAggregator(logger)
        self.classifier = ColorClassifier(logger=logger)

    def query_point(self, polygon: Polygon) -> Point:
        """Get the coordinate samples are requested for."""
        return centroid(polygon.points)

    def value_for_window(self, samples: Sequence[Sample], window: TimeWindow) -> float:
        """Average the samples within the window."""
        return self.aggregator.aggregate(samples, window)

    def color_for_value(self, value: float, data_source: DataSource) -> str:
        """Classify a value with the data source's rules."""
        return self.classifier.classify(value, data_source.rules)

    def rule_for_value(self, value: float, data_source: DataSource) -> Optional[Rule]:
        """Get the rule that decides the colour, if any."""
        return self.classifier.match(value, data_source.rules)

    def color_for_samples(
        self,
        samples: Sequence[Sample],
        window: TimeWindow,
        data_source: DataSource
    ) -> str:
        """
        Aggregate samples over the window and classify the result.

        Args:
            samples: Raw time series
            window: Active time window
            data_source: Data source whose rules decide the colour

        Returns:
            Display colour
        """
        return self.color_for_value(self.value_for_window(samples, window), data_source)


__all__ = [
    "SampleAggregator",
    "ColorClassifier",
    "RuleValidator",
    "ColorProcessor",
    "NO_DATA_VALUE",
    "aggregate",
    "classify",
    "evaluate_rule",
    "sort_rules",
    "centroid",
    "generate_palette",
    "contrast_color",
]
