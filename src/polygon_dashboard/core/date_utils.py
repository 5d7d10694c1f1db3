"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
All timestamps inside the dashboard are timezone-aware UTC.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Berlin', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        """
        Convert datetime to UTC.

        Args:
            dt: Datetime object (can be naive or aware)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        if dt.tzinfo is None:
            # Assume UTC if no timezone
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    @classmethod
    def parse_iso(cls, value: str) -> datetime:
        """
        Parse an ISO 8601 timestamp into an aware UTC datetime.

        Accepts a trailing 'Z' and hour-only archive timestamps
        such as '2024-01-01T13:00'. Naive values are taken as UTC.

        Raises:
            ValueError: If the string is not a valid timestamp
        """
        if not isinstance(value, str) or not value:
            raise ValueError(f"Invalid timestamp: {value!r}")

        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        return cls.to_utc(datetime.fromisoformat(text))

    @classmethod
    def to_archive_date(cls, dt: datetime) -> str:
        """Format a datetime as the UTC calendar date expected by the archive API."""
        return cls.to_utc(dt).strftime("%Y-%m-%d")

    @classmethod
    def hourly_steps(
        cls,
        start: datetime,
        end: datetime,
        interval_hours: int = constants.SAMPLE_INTERVAL_HOURS
    ) -> List[datetime]:
        """
        Build evenly spaced timestamps from start to end, both inclusive.

        Args:
            start: First step
            end: Upper bound (included if it falls on a step)
            interval_hours: Spacing between steps

        Returns:
            List of aware UTC datetimes; empty if start > end
        """
        current = cls.to_utc(start)
        stop = cls.to_utc(end)

        steps = []
        while current <= stop:
            steps.append(current)
            current = current + timedelta(hours=interval_hours)
        return steps

    def get_default_range(
        self,
        days: int,
        reference_time: Optional[datetime] = None
    ) -> Tuple[datetime, datetime]:
        """
        Get the default timeline range centred on the reference time.

        Args:
            days: Number of days on each side of the reference time
            reference_time: Reference time (defaults to now in UTC)

        Returns:
            Tuple of (start_datetime, end_datetime), both aware UTC
        """
        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        reference_time = self.to_utc(reference_time)

        start = reference_time - timedelta(days=days)
        end = reference_time + timedelta(days=days)

        self.logger.debug(
            f"Default timeline range: {start.isoformat()} to {end.isoformat()}"
        )
        return start, end

    @classmethod
    def format_display(cls, dt: datetime, timezone_str: str = "UTC") -> str:
        """
        Format a timestamp for display, e.g. 'Jan 05, 14:00'.

        Args:
            dt: Datetime (naive values are taken as UTC)
            timezone_str: Display timezone
        """
        tz = cls.parse_timezone(timezone_str)
        return cls.to_utc(dt).astimezone(tz).strftime("%b %d, %H:%M")

    @classmethod
    def floor_to_hour(cls, dt: datetime) -> datetime:
        """Truncate a datetime to the start of its hour, in UTC."""
        return cls.to_utc(dt).replace(minute=0, second=0, microsecond=0)
