"""
Sample provider service.

Fetches hourly metric samples for a coordinate and time window from the
weather archive, substituting a synthetic series when the archive fails.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

import requests  # type: ignore

from .fallback import SyntheticSeriesGenerator
from ..core import constants
from ..core.date_utils import DateUtils
from ..errors import SampleFetchError
from ..models import Point, Sample, TimeWindow
from ..processing.geometry import centroid

if TYPE_CHECKING:
    from ..api import OpenMeteoAPI


class SampleProvider:
    """Fetch metric samples for a point, falling back to synthetic data."""

    def __init__(
        self,
        api_client: Optional["OpenMeteoAPI"],
        fallback: Optional[SyntheticSeriesGenerator] = None,
        default_field: str = constants.DEFAULT_WEATHER_FIELD,
        use_fallback_only: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sample provider.

        Args:
            api_client: Archive API client (may be None in offline mode)
            fallback: Synthetic series generator used on failure
            default_field: Hourly field used when none is given
            use_fallback_only: Never call the archive
            logger: Logger instance
        """
        self.api_client = api_client
        self.default_field = default_field
        self.use_fallback_only = use_fallback_only or api_client is None
        self.logger = logger or logging.getLogger(__name__)
        self.fallback = fallback or SyntheticSeriesGenerator(logger=logger)

    def fetch_samples(
        self,
        point: Point,
        window: TimeWindow,
        field: Optional[str] = None
    ) -> List[Sample]:
        """
        Fetch hourly samples covering the window's calendar days.

        Never raises for archive problems: request errors and malformed
        payloads are logged and replaced by the synthetic series.

        Args:
            point: Query coordinate
            window: Time window to cover
            field: Hourly field name (defaults to the provider's field)

        Returns:
            List of samples (flagged ``synthetic`` when substituted)
        """
        field = field or self.default_field

        if self.use_fallback_only:
            self.logger.warning(
                f"Offline mode: using synthetic {field} values for "
                f"({point.lat:.4f}, {point.lng:.4f}); these are not real readings"
            )
            return self.fallback.generate(point, window)

        try:
            payload = self.api_client.get_hourly_archive(
                latitude=point.lat,
                longitude=point.lng,
                start_date=DateUtils.to_archive_date(window.start),
                end_date=DateUtils.to_archive_date(window.end),
                fields=[field],
            )
            samples = self.parse_hourly(payload, field, point)

        except (requests.exceptions.RequestException, SampleFetchError, ValueError) as e:
            self.logger.warning(
                f"Archive fetch failed for ({point.lat:.4f}, {point.lng:.4f}): {e}. "
                f"Substituting synthetic {field} values; these are not real readings"
            )
            return self.fallback.generate(point, window)

        self.logger.debug(f"Retrieved {len(samples)} {field} samples")
        return samples

    def fetch_samples_for_polygon(
        self,
        points: Sequence[Point],
        window: TimeWindow,
        field: Optional[str] = None
    ) -> List[Sample]:
        """Fetch samples at the centroid of a polygon's vertices."""
        return self.fetch_samples(centroid(points), window, field)

    @staticmethod
    def parse_hourly(payload: Any, field: str, point: Point) -> List[Sample]:
        """
        Convert an archive response into samples.

        Args:
            payload: Decoded archive JSON
            field: Hourly field to read
            point: Coordinate stamped on each sample

        Returns:
            Samples in archive order; hours without a value are skipped

        Raises:
            SampleFetchError: If the payload lacks the hourly arrays, they disagree
                or no hour carries a value
        """
        if not isinstance(payload, dict):
            raise SampleFetchError(f"Unexpected archive payload: {type(payload).__name__}")

        hourly: Dict[str, Any] = payload.get("hourly") or {}
        times = hourly.get("time")
        values = hourly.get(field)

        if not isinstance(times, list) or not isinstance(values, list):
            raise SampleFetchError(f"Archive payload has no hourly '{field}' data")

        if len(times) != len(values):
            raise SampleFetchError(
                f"Archive returned {len(times)} timestamps but {len(values)} values"
            )

        samples = []
        for time_str, value in zip(times, values):
            if value is None:
                continue
            try:
                samples.append(
                    Sample(
                        timestamp=DateUtils.parse_iso(time_str),
                        value=float(value),
                        latitude=point.lat,
                        longitude=point.lng,
                    )
                )
            except (TypeError, ValueError) as e:
                raise SampleFetchError(f"Malformed archive entry {time_str!r}: {e}") from e

        if not samples:
            raise SampleFetchError(f"Archive returned no {field} values for the requested days")

        return samples
