"""
Polygon data models.

Contains the DTO for a user-drawn map polygon.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from .geometry import Point
from ..core import constants
from ..core.date_utils import DateUtils


@dataclass
class Polygon:
    """
    A user-drawn polygon.

    ``color`` is derived from the assigned data source and the active time
    window; it is recomputed rather than edited.
    """

    id: str
    points: List[Point]
    data_source_id: str
    color: str = constants.DEFAULT_POLYGON_COLOR
    name: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(pytz.UTC))

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "points": [point.to_dict() for point in self.points],
            "dataSource": self.data_source_id,
            "color": self.color,
            "name": self.name,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Polygon":
        created_at = data.get("createdAt")
        return cls(
            id=str(data["id"]),
            points=[Point.from_dict(point) for point in data.get("points", [])],
            data_source_id=data["dataSource"],
            color=data.get("color", constants.DEFAULT_POLYGON_COLOR),
            name=data.get("name"),
            created_at=DateUtils.parse_iso(created_at) if created_at else datetime.now(pytz.UTC),
        )
