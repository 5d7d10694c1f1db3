"""
Polygon geometry helpers.
"""

from typing import Sequence

from ..models import Point


def centroid(points: Sequence[Point]) -> Point:
    """
    Arithmetic mean of latitudes and longitudes.

    This is the vertex average, not the area centroid; it only serves as the
    single query coordinate for a polygon. An empty sequence yields (0, 0).
    """
    if not points:
        return Point(lat=0.0, lng=0.0)

    count = len(points)
    return Point(
        lat=sum(point.lat for point in points) / count,
        lng=sum(point.lng for point in points) / count,
    )
