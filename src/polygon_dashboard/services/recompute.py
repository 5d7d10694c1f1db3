"""
Polygon recolouring service.

Recomputes every polygon's colour for the active time window. Each polygon
runs as its own asyncio task: the blocking archive request is moved to a
worker thread and the result is written back to the store when it arrives.

Recomputes are never cancelled. When the window changes while a previous
recompute is still in flight, the older task still completes and writes
its colour; whichever task finishes last wins for that polygon, so a
polygon can briefly show a colour computed for an outdated window.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Set, TYPE_CHECKING

from .sample_provider import SampleProvider
from ..models import DataSource, Polygon, TimeWindow
from ..processing import ColorProcessor

if TYPE_CHECKING:
    from ..store import DashboardStore, StateChange


@dataclass(frozen=True)
class PolygonColoring:
    """Outcome of recolouring one polygon."""

    polygon_id: str
    value: float
    color: str
    window: TimeWindow
    rule_label: Optional[str] = None
    synthetic: bool = False


class PolygonRecolorer:
    """Recompute polygon colours from fetched samples."""

    def __init__(
        self,
        provider: SampleProvider,
        processor: Optional[ColorProcessor] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize recolorer.

        Args:
            provider: Sample provider queried per polygon
            processor: Centroid/aggregation/classification facade
            logger: Logger instance
        """
        self.provider = provider
        self.processor = processor or ColorProcessor(logger)
        self.logger = logger or logging.getLogger(__name__)

    def compute(
        self,
        polygon: Polygon,
        data_source: DataSource,
        window: TimeWindow
    ) -> PolygonColoring:
        """
        Compute one polygon's colour synchronously.

        Args:
            polygon: Polygon to colour
            data_source: Its data source
            window: Time window to aggregate over

        Returns:
            Computed value and colour
        """
        point = self.processor.query_point(polygon)
        samples = self.provider.fetch_samples(point, window, data_source.field)

        value = self.processor.value_for_window(samples, window)
        rule = self.processor.rule_for_value(value, data_source)
        color = self.processor.color_for_value(value, data_source)

        return PolygonColoring(
            polygon_id=polygon.id,
            value=value,
            color=color,
            window=window,
            rule_label=rule.label if rule else None,
            synthetic=any(sample.synthetic for sample in samples),
        )

    async def recompute_polygon(
        self,
        store: "DashboardStore",
        polygon: Polygon,
        data_source: DataSource,
        window: TimeWindow
    ) -> Optional[PolygonColoring]:
        """
        Recolour one polygon and write the colour back to the store.

        Failures are logged and leave the polygon's previous colour in place.

        Returns:
            The result, or None if the recompute failed
        """
        try:
            result = await asyncio.to_thread(self.compute, polygon, data_source, window)
        except Exception as e:
            self.logger.error(
                f"Failed to recolour polygon {polygon.display_name}: {e}",
                exc_info=True
            )
            return None

        try:
            store.update_polygon_color(polygon.id, result.color)
        except KeyError:
            self.logger.debug(f"Polygon {polygon.id} was deleted before its colour arrived")
            return None

        self.logger.debug(
            f"Polygon {polygon.display_name}: {result.value} -> {result.color}"
        )
        return result

    async def recompute_all(
        self,
        store: "DashboardStore",
        window: Optional[TimeWindow] = None
    ) -> Dict[str, PolygonColoring]:
        """
        Recolour every polygon whose data source exists.

        Args:
            store: Store to read polygons from and write colours to
            window: Window to aggregate over (defaults to the store's active window)

        Returns:
            Results keyed by polygon id (failed polygons are absent)
        """
        window = window or store.active_window()
        tasks = []

        for polygon in store.polygons:
            data_source = store.find_data_source(polygon.data_source_id)
            if data_source is None:
                self.logger.debug(
                    f"Skipping polygon {polygon.display_name}: "
                    f"data source {polygon.data_source_id} does not exist"
                )
                continue
            tasks.append(self.recompute_polygon(store, polygon, data_source, window))

        results = await asyncio.gather(*tasks)
        return {result.polygon_id: result for result in results if result is not None}


class DashboardSession:
    """
    Keeps polygon colours in step with store changes.

    Every change that can invalidate colours schedules a fresh recompute on
    the running event loop. Earlier recomputes are left to finish.
    """

    def __init__(
        self,
        store: "DashboardStore",
        recolorer: PolygonRecolorer,
        logger: Optional[logging.Logger] = None
    ):
        self.store = store
        self.recolorer = recolorer
        self.logger = logger or logging.getLogger(__name__)
        self.needs_refresh = True
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe = store.subscribe(self._on_change)

    def _on_change(self, change: "StateChange") -> None:
        if not change.kind.triggers_recompute:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet; refresh() picks it up
            self.needs_refresh = True
            return

        self.logger.debug(f"Scheduling recompute after {change.kind.value}")
        # The window is fixed now; later changes schedule their own recompute
        window = self.store.active_window()
        task = loop.create_task(self.recolorer.recompute_all(self.store, window))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def refresh(self) -> Dict[str, PolygonColoring]:
        """Recompute all polygons now and wait for the result."""
        self.needs_refresh = False
        return await self.recolorer.recompute_all(self.store)

    async def wait_idle(self) -> None:
        """Wait until every scheduled recompute has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Stop listening to the store."""
        self._unsubscribe()
