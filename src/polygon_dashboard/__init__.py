"""
Polygon Weather Map Dashboard

This package colours user-drawn map polygons from weather observations,
averaged over a selectable time window and classified by user-defined
threshold rules.
"""

__version__ = "0.1.0"
__description__ = "Polygon colouring from time-windowed weather metrics"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "DashboardApp":
        from .main import DashboardApp
        return DashboardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DashboardApp",
]
