"""
Local persistence of dashboard content.

Only polygons and data sources (with their rules) are stored. Timeline,
drawing mode and selection reset on every start.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..errors import InvalidRuleError, PersistenceError
from ..models import DataSource, Polygon
from ..processing.validator import RuleValidator

if TYPE_CHECKING:
    from .dashboard_store import DashboardStore

STATE_VERSION = 1


@dataclass
class PersistedState:
    """Content restored from disk."""

    polygons: List[Polygon] = field(default_factory=list)
    data_sources: List[DataSource] = field(default_factory=list)


class StatePersistence:
    """Save and load dashboard content as JSON."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """
        Initialize persistence.

        Args:
            path: JSON file holding the persisted content
            logger: Logger instance
        """
        self.path = Path(path)
        self.logger = logger or logging.getLogger(__name__)
        self.validator = RuleValidator(logger)

    def save(self, store: "DashboardStore") -> None:
        """
        Write polygons and data sources to disk.

        The file is replaced atomically.
        """
        document: Dict[str, Any] = {
            "version": STATE_VERSION,
            "polygons": [polygon.to_dict() for polygon in store.polygons],
            "dataSources": [data_source.to_dict() for data_source in store.data_sources],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            self.logger.error(f"Failed to save state to {self.path}: {e}")
            raise PersistenceError(f"Cannot write state file {self.path}: {e}") from e

        self.logger.info(
            f"Saved {len(document['polygons'])} polygons and "
            f"{len(document['dataSources'])} data sources to {self.path}"
        )

    def load(self) -> Optional[PersistedState]:
        """
        Read persisted content.

        Returns:
            Restored content, or None if nothing has been saved yet

        Raises:
            PersistenceError: If the file exists but cannot be used
        """
        if not self.path.exists():
            self.logger.info(f"No saved state at {self.path}, starting with defaults")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read state file {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise PersistenceError(f"State file {self.path} does not contain an object")

        version = document.get("version", STATE_VERSION)
        if version != STATE_VERSION:
            raise PersistenceError(f"Unsupported state file version: {version}")

        try:
            polygons = [Polygon.from_dict(item) for item in document.get("polygons", [])]
            data_sources = [DataSource.from_dict(item) for item in document.get("dataSources", [])]
            for data_source in data_sources:
                self.validator.ensure_valid_data_source(data_source)
        except (KeyError, TypeError, ValueError) as e:
            # InvalidRuleError is a ValueError
            kind = "invalid rule" if isinstance(e, InvalidRuleError) else "malformed entry"
            raise PersistenceError(f"State file {self.path} has a {kind}: {e}") from e

        self.logger.info(
            f"Loaded {len(polygons)} polygons and {len(data_sources)} data sources from {self.path}"
        )
        return PersistedState(polygons=polygons, data_sources=data_sources)
