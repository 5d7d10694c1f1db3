"""
Dashboard state container.

Owns the single dashboard state tree and exposes typed actions that mutate
it. Consumers receive the store explicitly and may subscribe to the
changes each action emits.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from .changes import ChangeKind, StateChange
from .defaults import default_state
from ..core import constants
from ..core.date_utils import DateUtils
from ..models import DashboardState, DataSource, Point, Polygon, Rule, TimeWindow
from ..processing.validator import RuleValidator

Listener = Callable[[StateChange], None]


def _new_id() -> str:
    return uuid.uuid4().hex


def _detached(data_source: DataSource) -> DataSource:
    """Copy handed to callers; editing its rule list leaves the store untouched."""
    return replace(data_source, rules=list(data_source.rules))


class DashboardStore:
    """Explicit state container for polygons, timeline and data sources."""

    def __init__(
        self,
        state: Optional[DashboardState] = None,
        validator: Optional[RuleValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize store.

        Args:
            state: Initial state tree (defaults to a fresh default state)
            validator: Rule validator applied to every rule/data source edit
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or RuleValidator(logger)
        self._state = state or default_state()
        self._listeners: List[Listener] = []

    @classmethod
    def from_content(
        cls,
        polygons: Iterable[Polygon],
        data_sources: Iterable[DataSource],
        window_days: int = constants.DEFAULT_WINDOW_DAYS,
        reference_time: Optional[datetime] = None,
        logger: Optional[logging.Logger] = None
    ) -> "DashboardStore":
        """
        Build a store around restored polygons and data sources.

        Timeline, drawing mode and selection start from their defaults.
        """
        state = default_state(window_days, reference_time)
        state.map.polygons = list(polygons)
        state.data_sources = list(data_sources)
        return cls(state=state, logger=logger)

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def polygons(self) -> List[Polygon]:
        return list(self._state.map.polygons)

    @property
    def data_sources(self) -> List[DataSource]:
        return [_detached(data_source) for data_source in self._state.data_sources]

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every action.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: ChangeKind, target_id: Optional[str] = None) -> None:
        change = StateChange(kind=kind, target_id=target_id)
        self.logger.debug(f"State change: {kind.value} {target_id or ''}".rstrip())
        for listener in list(self._listeners):
            listener(change)

    # Map actions

    def set_map_center(self, center: Point) -> None:
        self._state.map.center = center
        self._emit(ChangeKind.MAP_VIEW)

    def set_map_zoom(self, zoom: int) -> None:
        self._state.map.zoom = zoom
        self._emit(ChangeKind.MAP_VIEW)

    def set_drawing(self, is_drawing: bool) -> None:
        self._state.map.is_drawing = is_drawing
        self._emit(ChangeKind.MAP_VIEW)

    def get_polygon(self, polygon_id: str) -> Polygon:
        for polygon in self._state.map.polygons:
            if polygon.id == polygon_id:
                return polygon
        raise KeyError(f"Polygon {polygon_id} not found")

    def _replace_polygon(self, updated: Polygon) -> None:
        self._state.map.polygons = [
            updated if polygon.id == updated.id else polygon
            for polygon in self._state.map.polygons
        ]

    def add_polygon(
        self,
        points: Sequence[Point],
        data_source_id: str,
        name: Optional[str] = None
    ) -> Polygon:
        """
        Add a drawn polygon assigned to a data source.

        Raises:
            KeyError: If the data source does not exist
        """
        self.get_data_source(data_source_id)

        polygon = Polygon(
            id=_new_id(),
            points=list(points),
            data_source_id=data_source_id,
            name=name,
        )
        self._state.map.polygons = self._state.map.polygons + [polygon]
        self.logger.info(f"Added polygon {polygon.display_name} with {len(polygon.points)} points")
        self._emit(ChangeKind.POLYGON_ADDED, polygon.id)
        return polygon

    def update_polygon(
        self,
        polygon_id: str,
        points: Optional[Sequence[Point]] = None,
        data_source_id: Optional[str] = None,
        name: Optional[str] = None
    ) -> Polygon:
        """
        Change a polygon's geometry, data source or name.

        Raises:
            KeyError: If the polygon or the new data source does not exist
        """
        polygon = self.get_polygon(polygon_id)
        changes = []

        if points is not None:
            polygon = replace(polygon, points=list(points))
            changes.append(ChangeKind.POLYGON_GEOMETRY)

        if data_source_id is not None and data_source_id != polygon.data_source_id:
            self.get_data_source(data_source_id)
            polygon = replace(polygon, data_source_id=data_source_id)
            changes.append(ChangeKind.POLYGON_ASSIGNMENT)

        if name is not None:
            polygon = replace(polygon, name=name)
            changes.append(ChangeKind.POLYGON_RENAMED)

        self._replace_polygon(polygon)
        for kind in changes:
            self._emit(kind, polygon_id)
        return polygon

    def update_polygon_color(self, polygon_id: str, color: str) -> None:
        """
        Store a recomputed colour.

        Raises:
            KeyError: If the polygon was deleted meanwhile
        """
        polygon = self.get_polygon(polygon_id)
        if polygon.color == color:
            return
        self._replace_polygon(replace(polygon, color=color))
        self._emit(ChangeKind.POLYGON_COLOR, polygon_id)

    def delete_polygon(self, polygon_id: str) -> None:
        """
        Remove a polygon, clearing the selection if it pointed at it.

        Raises:
            KeyError: If the polygon does not exist
        """
        self.get_polygon(polygon_id)
        self._state.map.polygons = [
            polygon for polygon in self._state.map.polygons if polygon.id != polygon_id
        ]
        if self._state.map.selected_polygon == polygon_id:
            self._state.map.selected_polygon = None
        self._emit(ChangeKind.POLYGON_DELETED, polygon_id)

    def select_polygon(self, polygon_id: Optional[str]) -> None:
        if polygon_id is not None:
            self.get_polygon(polygon_id)
        self._state.map.selected_polygon = polygon_id
        self._emit(ChangeKind.SELECTION, polygon_id)

    # Timeline actions

    def active_window(self) -> TimeWindow:
        """Range in range mode, otherwise an instant at the current time."""
        return self._state.timeline.active_window()

    def time_steps(self) -> List[datetime]:
        """Hourly slider positions across the timeline range."""
        time_range = self._state.timeline.time_range
        return DateUtils.hourly_steps(time_range.start, time_range.end)

    def _apply_timeline(self, update: Callable[[], None]) -> None:
        before = self.active_window()
        update()
        after = self.active_window()
        self._emit(ChangeKind.WINDOW if after != before else ChangeKind.TIMELINE)

    def set_current_time(self, moment: datetime) -> None:
        def update() -> None:
            self._state.timeline.current_time = DateUtils.to_utc(moment)
        self._apply_timeline(update)

    def set_time_range(self, time_range: TimeWindow) -> None:
        def update() -> None:
            self._state.timeline.time_range = time_range
        self._apply_timeline(update)

    def set_range_mode(self, is_range_mode: bool) -> None:
        def update() -> None:
            self._state.timeline.is_range_mode = is_range_mode
        self._apply_timeline(update)

    # Data source actions

    def find_data_source(self, data_source_id: str) -> Optional[DataSource]:
        for data_source in self._state.data_sources:
            if data_source.id == data_source_id:
                return _detached(data_source)
        return None

    def get_data_source(self, data_source_id: str) -> DataSource:
        data_source = self.find_data_source(data_source_id)
        if data_source is None:
            raise KeyError(f"Data source {data_source_id} not found")
        return data_source

    def _replace_data_source(self, updated: DataSource) -> None:
        self._state.data_sources = [
            updated if data_source.id == updated.id else data_source
            for data_source in self._state.data_sources
        ]

    def add_data_source(
        self,
        name: str,
        field: str,
        rules: Iterable[Rule] = (),
        data_source_id: Optional[str] = None
    ) -> DataSource:
        """
        Add a data source.

        Raises:
            InvalidRuleError: If the data source or one of its rules is invalid
            ValueError: If the id is already taken
        """
        data_source_id = data_source_id or _new_id()
        if self.find_data_source(data_source_id) is not None:
            raise ValueError(f"Data source {data_source_id} already exists")

        data_source = DataSource(id=data_source_id, name=name, field=field, rules=list(rules))
        self.validator.ensure_valid_data_source(data_source)

        self._state.data_sources = self._state.data_sources + [data_source]
        self.logger.info(f"Added data source {name} ({field})")
        self._emit(ChangeKind.DATA_SOURCE_ADDED, data_source_id)
        return _detached(data_source)

    def update_data_source(
        self,
        data_source_id: str,
        name: Optional[str] = None,
        field: Optional[str] = None
    ) -> DataSource:
        """
        Rename a data source or change its field.

        Raises:
            KeyError: If the data source does not exist
            InvalidRuleError: If the result is invalid
        """
        data_source = self.get_data_source(data_source_id)
        updated = replace(
            data_source,
            name=data_source.name if name is None else name,
            field=data_source.field if field is None else field,
        )
        self.validator.ensure_valid_data_source(updated)

        self._replace_data_source(updated)
        self._emit(ChangeKind.DATA_SOURCE_UPDATED, data_source_id)
        return _detached(updated)

    def delete_data_source(self, data_source_id: str) -> None:
        """
        Remove a data source and its rules.

        Polygons still pointing at it keep their last colour and are skipped
        by recomputation.

        Raises:
            KeyError: If the data source does not exist
        """
        self.get_data_source(data_source_id)
        self._state.data_sources = [
            data_source for data_source in self._state.data_sources
            if data_source.id != data_source_id
        ]
        if self._state.selected_data_source == data_source_id:
            self._state.selected_data_source = None
        self._emit(ChangeKind.DATA_SOURCE_DELETED, data_source_id)

    def select_data_source(self, data_source_id: Optional[str]) -> None:
        if data_source_id is not None:
            self.get_data_source(data_source_id)
        self._state.selected_data_source = data_source_id
        self._emit(ChangeKind.SELECTION, data_source_id)

    # Rule actions

    def add_rule(
        self,
        data_source_id: str,
        operator: str,
        threshold: float,
        color: str,
        label: str = ""
    ) -> Rule:
        """
        Append a validated rule to a data source.

        Raises:
            KeyError: If the data source does not exist
            InvalidRuleError: If the rule is invalid
        """
        data_source = self.get_data_source(data_source_id)

        rule = Rule(id=_new_id(), operator=operator, threshold=threshold, color=color, label=label)
        self.validator.ensure_valid_rule(rule)
        rule = replace(rule, threshold=float(threshold))

        self._replace_data_source(replace(data_source, rules=data_source.rules + [rule]))
        self._emit(ChangeKind.RULES, data_source_id)
        return rule

    def update_rule(
        self,
        data_source_id: str,
        rule_id: str,
        operator: Optional[str] = None,
        threshold: Optional[float] = None,
        color: Optional[str] = None,
        label: Optional[str] = None
    ) -> Rule:
        """
        Edit fields of an existing rule; the edited rule is validated.

        Raises:
            KeyError: If the data source or rule does not exist
            InvalidRuleError: If the edited rule is invalid
        """
        data_source = self.get_data_source(data_source_id)
        rule = data_source.get_rule(rule_id)

        updated = replace(
            rule,
            operator=rule.operator if operator is None else operator,
            threshold=rule.threshold if threshold is None else threshold,
            color=rule.color if color is None else color,
            label=rule.label if label is None else label,
        )
        self.validator.ensure_valid_rule(updated)
        updated = replace(updated, threshold=float(updated.threshold))

        rules = [updated if r.id == rule_id else r for r in data_source.rules]
        self._replace_data_source(replace(data_source, rules=rules))
        self._emit(ChangeKind.RULES, data_source_id)
        return updated

    def delete_rule(self, data_source_id: str, rule_id: str) -> None:
        """
        Remove a rule from a data source.

        Raises:
            KeyError: If the data source or rule does not exist
        """
        data_source = self.get_data_source(data_source_id)
        data_source.get_rule(rule_id)

        rules = [rule for rule in data_source.rules if rule.id != rule_id]
        self._replace_data_source(replace(data_source, rules=rules))
        self._emit(ChangeKind.RULES, data_source_id)
