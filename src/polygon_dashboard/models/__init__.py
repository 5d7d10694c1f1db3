"""
Data models for the polygon dashboard.

Contains DTOs for geometry, samples, time windows, colour rules and the
dashboard state tree.
"""

from .geometry import Point
from .timeseries import Sample, TimeWindow
from .rules import Rule, DataSource
from .polygon import Polygon
from .dashboard import MapState, TimelineState, DashboardState

__all__ = [
    "Point",
    "Sample",
    "TimeWindow",
    "Rule",
    "DataSource",
    "Polygon",
    "MapState",
    "TimelineState",
    "DashboardState",
]
