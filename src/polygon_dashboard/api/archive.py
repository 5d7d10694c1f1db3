"""
Historical weather archive operations (Open-Meteo).

Handles retrieval of hourly observations for a coordinate and date range.
"""

import logging
from typing import Any, Dict, Iterable, Optional


class ArchiveAPI:
    """Archive-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_hourly_archive(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
        fields: Iterable[str] = ("temperature_2m",),
        timezone: str = "UTC"
    ) -> Dict[str, Any]:
        """
        Get hourly archive data for a coordinate.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            start_date: First day (YYYY-MM-DD)
            end_date: Last day (YYYY-MM-DD), inclusive
            fields: Hourly variables to request
            timezone: Timezone the returned timestamps are expressed in

        Returns:
            Archive response; hourly values are under
            ``{"hourly": {"time": [...], "<field>": [...]}}``
        """
        self.logger.debug(
            f"Fetching archive for ({latitude}, {longitude}) {start_date}..{end_date}"
        )
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date,
            "end_date": end_date,
            "hourly": ",".join(fields),
            "timezone": timezone,
        }
        return self.get("", params=params)
