"""
Integration tests for the complete recolouring workflow.

Runs the application end to end with a temporary config and state file.
The archive is mocked or bypassed; no network access is needed.
"""

import json
from datetime import datetime
from unittest.mock import patch

import pytest  # type: ignore
import pytz

from src.polygon_dashboard.main import DashboardApp, parse_window
from src.polygon_dashboard.models import Point, TimeWindow
from src.polygon_dashboard.store import DashboardStore, StatePersistence, default_data_sources


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Config and state file with one polygon over Berlin."""
    for name in ("API_BASE_URL", "API_TIMEOUT", "STATE_FILE", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    state_file = tmp_path / "state.json"
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "api": {
            "base_url": "https://archive-api.open-meteo.com/v1/archive",
            "timeout": 5,
            "max_retries": 0
        },
        "storage": {"state_file": str(state_file)},
        "weather": {"fallback_seed": 1},
        "timeline": {"timezone": "Europe/Berlin"},
        "logging": {"file": str(tmp_path / "logs" / "app.log")}
    }), encoding="utf-8")

    store = DashboardStore.from_content([], default_data_sources())
    polygon = store.add_polygon(
        [Point(52.0, 13.0), Point(53.0, 13.0), Point(53.0, 14.0), Point(52.0, 14.0)],
        "temperature",
        name="Berlin"
    )
    StatePersistence(str(state_file)).save(store)

    return {"config": str(config_file), "state": state_file, "polygon_id": polygon.id}


class TestDashboardApp:
    """Test the application workflow."""

    def test_temperature_scenario(self, workspace):
        """Average 22.3 over the range colours the polygon blue."""
        payload = {
            "hourly": {
                "time": ["2024-06-01T10:00", "2024-06-01T11:00", "2024-06-01T12:00"],
                "temperature_2m": [21.3, 22.3, 23.3]
            }
        }
        window = parse_window(None, "2024-06-01T10:00", "2024-06-01T12:00")

        app = DashboardApp(config_file=workspace["config"])
        with patch("src.polygon_dashboard.api.OpenMeteoAPI.get_hourly_archive", return_value=payload):
            results = app.run(window=window)

        result = results[workspace["polygon_id"]]
        assert result.value == 22.3
        assert result.color == "#4444ff"
        assert not result.synthetic

        saved = json.loads(workspace["state"].read_text(encoding="utf-8"))
        assert saved["polygons"][0]["color"] == "#4444ff"

    def test_recorded_archive_instant(self, workspace, archive_payload):
        window = parse_window("2024-06-01T07:00", None, None)

        app = DashboardApp(config_file=workspace["config"])
        with patch("src.polygon_dashboard.api.OpenMeteoAPI.get_hourly_archive", return_value=archive_payload):
            results = app.run(window=window)

        result = results[workspace["polygon_id"]]
        assert result.value == 19.6
        assert result.color == "#4444ff"

    def test_offline_run_uses_synthetic_data(self, workspace):
        window = parse_window(None, "2024-06-01T00:00", "2024-06-02T00:00")

        app = DashboardApp(config_file=workspace["config"], offline=True)
        results = app.run(window=window)

        result = results[workspace["polygon_id"]]
        assert result.synthetic
        assert app.api_client is None
        assert result.color in {"#ff4444", "#4444ff", "#44ff44"}

    def test_window_is_described_in_display_timezone(self, workspace):
        app = DashboardApp(config_file=workspace["config"])

        instant = parse_window("2024-01-05T13:00:00Z", None, None)
        span = parse_window(None, "2024-01-05T13:00:00Z", "2024-01-06T08:30:00Z")

        assert app.describe_window(instant) == "Jan 05, 14:00 (Europe/Berlin)"
        assert app.describe_window(span) == "Jan 05, 14:00 - Jan 06, 09:30 (Europe/Berlin)"


class TestParseWindow:
    """Test CLI window parsing."""

    def test_no_arguments(self):
        assert parse_window(None, None, None) is None

    def test_instant(self):
        window = parse_window("2024-06-01T12:00", None, None)
        assert window == TimeWindow.instant(datetime(2024, 6, 1, 12, tzinfo=pytz.UTC))

    def test_range(self):
        window = parse_window(None, "2024-06-01T00:00", "2024-06-02T00:00")
        assert not window.is_instant

    @pytest.mark.parametrize("at,start,end", [
        ("2024-06-01T12:00", "2024-06-01T00:00", None),
        (None, "2024-06-01T00:00", None),
        (None, "2024-06-02T00:00", "2024-06-01T00:00"),
        ("soon", None, None),
    ])
    def test_invalid(self, at, start, end):
        with pytest.raises(ValueError):
            parse_window(at, start, end)
