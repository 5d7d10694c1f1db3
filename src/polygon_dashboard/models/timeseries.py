"""
Time series data models.

Contains DTOs for metric samples and the time window they are averaged over.
"""

from dataclasses import dataclass
from datetime import datetime

from ..core.date_utils import DateUtils


@dataclass(frozen=True)
class Sample:
    """A single metric observation at a point."""

    timestamp: datetime
    value: float
    latitude: float
    longitude: float
    synthetic: bool = False  # True when produced by the fallback generator

    def __post_init__(self):
        object.__setattr__(self, "timestamp", DateUtils.to_utc(self.timestamp))


@dataclass(frozen=True)
class TimeWindow:
    """
    Inclusive time interval used for aggregation.

    A single-instant selection is a window with start == end.
    Naive datetimes are interpreted as UTC.
    """

    start: datetime
    end: datetime

    def __post_init__(self):
        start = DateUtils.to_utc(self.start)
        end = DateUtils.to_utc(self.end)
        if start > end:
            raise ValueError(
                f"Time window start {start.isoformat()} is after end {end.isoformat()}"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def instant(cls, moment: datetime) -> "TimeWindow":
        """Create a zero-width window at a single instant."""
        return cls(start=moment, end=moment)

    @property
    def is_instant(self) -> bool:
        return self.start == self.end

    def contains(self, moment: datetime) -> bool:
        """Check whether a timestamp falls inside the window (bounds included)."""
        return self.start <= DateUtils.to_utc(moment) <= self.end
