"""
Geometry data models.

Contains DTOs for map coordinates.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class Point:
    """A WGS84 map coordinate."""

    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))
