"""
Services for the polygon dashboard.

Services orchestrate API access, synthetic fallback data and polygon
recolouring.
"""

from .fallback import SyntheticSeriesGenerator
from .sample_provider import SampleProvider
from .recompute import DashboardSession, PolygonColoring, PolygonRecolorer

__all__ = [
    "SyntheticSeriesGenerator",
    "SampleProvider",
    "PolygonRecolorer",
    "PolygonColoring",
    "DashboardSession",
]
