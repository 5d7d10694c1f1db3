"""
Default dashboard state.
"""

from datetime import datetime
from typing import List, Optional

import pytz

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import DashboardState, DataSource, MapState, Rule, TimelineState, TimeWindow


def default_data_sources() -> List[DataSource]:
    """The built-in temperature data source."""
    return [
        DataSource(
            id="temperature",
            name="Temperature",
            field=constants.DEFAULT_WEATHER_FIELD,
            rules=[
                Rule(id="1", operator="<", threshold=10.0, color="#ff4444", label="< 10°C"),
                Rule(id="2", operator=">=", threshold=10.0, color="#4444ff", label="10-25°C"),
                Rule(id="3", operator=">=", threshold=25.0, color="#44ff44", label="≥ 25°C"),
            ],
        )
    ]


def default_timeline(
    days: int = constants.DEFAULT_WINDOW_DAYS,
    reference_time: Optional[datetime] = None
) -> TimelineState:
    """
    Timeline spanning ``days`` on each side of the reference hour.

    Times are floored to the hour so slider steps line up with hourly samples.
    """
    if reference_time is None:
        reference_time = datetime.now(pytz.UTC)
    now = DateUtils.floor_to_hour(reference_time)
    start, end = DateUtils().get_default_range(days, now)
    return TimelineState(
        current_time=now,
        time_range=TimeWindow(start=start, end=end),
        is_range_mode=False,
    )


def default_state(
    days: int = constants.DEFAULT_WINDOW_DAYS,
    reference_time: Optional[datetime] = None
) -> DashboardState:
    """Fresh state: default map view, no polygons, default data sources."""
    return DashboardState(
        map=MapState(),
        timeline=default_timeline(days, reference_time),
        data_sources=default_data_sources(),
    )
