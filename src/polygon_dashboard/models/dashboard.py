"""
Dashboard state models.

The state tree owned by the dashboard store: map, timeline and data sources.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .geometry import Point
from .polygon import Polygon
from .rules import DataSource
from .timeseries import TimeWindow
from ..core import constants


@dataclass
class MapState:
    """Map view, drawing mode and polygons."""

    center: Point = field(default_factory=lambda: Point(*constants.DEFAULT_MAP_CENTER))
    zoom: int = constants.DEFAULT_MAP_ZOOM
    is_drawing: bool = False
    polygons: List[Polygon] = field(default_factory=list)
    selected_polygon: Optional[str] = None


@dataclass
class TimelineState:
    """Timeline slider position: an instant, or a range in range mode."""

    current_time: datetime
    time_range: TimeWindow
    is_range_mode: bool = False

    def active_window(self) -> TimeWindow:
        if self.is_range_mode:
            return self.time_range
        return TimeWindow.instant(self.current_time)


@dataclass
class DashboardState:
    """Complete dashboard state tree."""

    map: MapState
    timeline: TimelineState
    data_sources: List[DataSource] = field(default_factory=list)
    selected_data_source: Optional[str] = None
