"""
State change events emitted by the dashboard store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeKind(Enum):
    """What part of the state an action changed."""

    MAP_VIEW = "map_view"
    SELECTION = "selection"
    POLYGON_ADDED = "polygon_added"
    POLYGON_GEOMETRY = "polygon_geometry"
    POLYGON_ASSIGNMENT = "polygon_assignment"
    POLYGON_RENAMED = "polygon_renamed"
    POLYGON_COLOR = "polygon_color"
    POLYGON_DELETED = "polygon_deleted"
    WINDOW = "window"
    TIMELINE = "timeline"
    DATA_SOURCE_ADDED = "data_source_added"
    DATA_SOURCE_UPDATED = "data_source_updated"
    DATA_SOURCE_DELETED = "data_source_deleted"
    RULES = "rules"

    @property
    def triggers_recompute(self) -> bool:
        """Whether the change can invalidate polygon colours."""
        return self in _RECOMPUTE_KINDS


_RECOMPUTE_KINDS = frozenset({
    ChangeKind.POLYGON_ADDED,
    ChangeKind.POLYGON_GEOMETRY,
    ChangeKind.POLYGON_ASSIGNMENT,
    ChangeKind.WINDOW,
    ChangeKind.DATA_SOURCE_UPDATED,
    ChangeKind.RULES,
})


@dataclass(frozen=True)
class StateChange:
    """One applied store action."""

    kind: ChangeKind
    target_id: Optional[str] = None
