"""
Main entry point for the polygon dashboard.

Restores the saved polygons and data sources, recolours every polygon for
a chosen time window and saves the result.
"""

import asyncio
import random
import sys
from typing import Dict, Optional

from .core import Config, DateUtils, LoggerContext, setup_logger
from .api import OpenMeteoAPI
from .processing import ColorProcessor, contrast_color, sort_rules
from .services import (
    DashboardSession,
    PolygonColoring,
    PolygonRecolorer,
    SampleProvider,
    SyntheticSeriesGenerator,
)
from .store import DashboardStore, PersistedState, StatePersistence, default_data_sources
from .models import TimeWindow


class DashboardApp:
    """Main application for the polygon dashboard."""

    def __init__(self, config_file: Optional[str] = None, offline: bool = False):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            offline: Use the synthetic series instead of the archive
        """
        self.config = Config(config_file)
        self.offline = offline or self.config.use_fallback_only

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info("=" * 60)
        self.logger.info("Polygon Weather Map Dashboard")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.api_client: Optional[OpenMeteoAPI] = None
        self.persistence: Optional[StatePersistence] = None
        self.store: Optional[DashboardStore] = None
        self.session: Optional[DashboardSession] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        if not self.offline:
            self.api_client = OpenMeteoAPI(
                base_url=self.config.api_base_url,
                timeout=self.config.api_timeout,
                max_retries=self.config.api_max_retries,
                verify_ssl=self.config.api_verify_ssl,
                logger=self.logger
            )

        seed = self.config.fallback_seed
        provider = SampleProvider(
            api_client=self.api_client,
            fallback=SyntheticSeriesGenerator(
                rng=random.Random(seed) if seed is not None else None,
                logger=self.logger
            ),
            default_field=self.config.weather_field,
            use_fallback_only=self.offline,
            logger=self.logger
        )

        self.persistence = StatePersistence(self.config.state_file, logger=self.logger)
        persisted = self.persistence.load() or PersistedState(data_sources=default_data_sources())
        self.store = DashboardStore.from_content(
            polygons=persisted.polygons,
            data_sources=persisted.data_sources,
            window_days=self.config.default_window_days,
            logger=self.logger
        )

        recolorer = PolygonRecolorer(
            provider=provider,
            processor=ColorProcessor(self.logger),
            logger=self.logger
        )
        self.session = DashboardSession(self.store, recolorer, logger=self.logger)

        self.logger.info("All components initialized successfully")

    def apply_window(self, window: Optional[TimeWindow]) -> None:
        """Point the timeline at the requested window (instant or range)."""
        if window is None:
            return
        if window.is_instant:
            self.store.set_range_mode(False)
            self.store.set_current_time(window.start)
        else:
            self.store.set_time_range(window)
            self.store.set_range_mode(True)

    def run(self, window: Optional[TimeWindow] = None) -> Dict[str, PolygonColoring]:
        """
        Recolour all saved polygons for a time window and save the result.

        Args:
            window: Window to use; None keeps the default timeline position

        Returns:
            Results keyed by polygon id
        """
        try:
            self.initialize_components()
            self.apply_window(window)

            self.logger.info(f"Active window: {self.describe_window(self.store.active_window())}")

            if not self.store.polygons:
                self.logger.warning("No polygons to colour")
                return {}

            with LoggerContext(self.logger, f"recolouring {len(self.store.polygons)} polygons"):
                results = asyncio.run(self.session.refresh())

            self.persistence.save(self.store)
            self.log_legend()
            self.log_summary(results)
            return results

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.session:
                self.session.close()
            if self.api_client:
                self.api_client.close()

    def describe_window(self, window: TimeWindow) -> str:
        """Format a window in the configured display timezone."""
        tz = self.config.timezone
        if window.is_instant:
            return f"{DateUtils.format_display(window.start, tz)} ({tz})"
        return (
            f"{DateUtils.format_display(window.start, tz)} - "
            f"{DateUtils.format_display(window.end, tz)} ({tz})"
        )

    def log_legend(self) -> None:
        """Log each data source's rules in evaluation order."""
        for data_source in self.store.data_sources:
            self.logger.info(f"Legend for {data_source.name} ({data_source.field}):")
            for rule in sort_rules(data_source.rules):
                label = rule.label or "unlabelled"
                self.logger.info(
                    f"  {rule.operator} {rule.threshold:g} -> {rule.color} "
                    f"[{label}, text {contrast_color(rule.color)}]"
                )

    def log_summary(self, results: Dict[str, PolygonColoring]) -> None:
        """Log one line per polygon with its value, colour and rule."""
        for polygon in self.store.polygons:
            result = results.get(polygon.id)
            if result is None:
                self.logger.info(f"{polygon.display_name}: unchanged ({polygon.color})")
                continue
            label = result.rule_label or "no rule matched"
            note = " [synthetic data]" if result.synthetic else ""
            self.logger.info(
                f"{polygon.display_name}: {result.value} -> {result.color} ({label}){note}"
            )


def parse_window(at: Optional[str], start: Optional[str], end: Optional[str]) -> Optional[TimeWindow]:
    """
    Build a time window from CLI arguments.

    Raises:
        ValueError: On bad timestamps or an incomplete/conflicting combination
    """
    if at and (start or end):
        raise ValueError("Use either --at or --start/--end, not both")
    if at:
        return TimeWindow.instant(DateUtils.parse_iso(at))
    if start or end:
        if not (start and end):
            raise ValueError("--start and --end must be given together")
        return TimeWindow(start=DateUtils.parse_iso(start), end=DateUtils.parse_iso(end))
    return None


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Recolour saved map polygons from time-windowed weather data"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--at",
        type=str,
        default=None,
        help="Single instant (ISO 8601, e.g. 2024-06-01T12:00)"
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Range start (ISO 8601)"
    )
    parser.add_argument(
        "--end",
        type=str,
        default=None,
        help="Range end (ISO 8601)"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use synthetic data instead of the weather archive"
    )

    args = parser.parse_args()

    try:
        window = parse_window(args.at, args.start, args.end)
    except ValueError as e:
        print(f"Invalid time window: {e}")
        sys.exit(1)

    try:
        app = DashboardApp(config_file=args.config, offline=args.offline)
        app.run(window=window)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
