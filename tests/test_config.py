"""
Tests for configuration loading.
"""

import json

import pytest  # type: ignore

from src.polygon_dashboard.core import Config, DateUtils

VALID_CONFIG = {
    "api": {
        "base_url": "https://archive.example.test/v1/archive",
        "timeout": 10,
        "max_retries": 2
    },
    "storage": {"state_file": "state.json"},
    "weather": {"field": "temperature_2m", "fallback_seed": 5}
}


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a config file and return its path."""
    for name in ("API_BASE_URL", "API_TIMEOUT", "STATE_FILE", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    def write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return write


class TestConfig:
    """Test cases for Config."""

    def test_load_values_and_defaults(self, write_config):
        config = Config(write_config(VALID_CONFIG))

        assert config.api_base_url == "https://archive.example.test/v1/archive"
        assert config.api_timeout == 10
        assert config.api_max_retries == 2
        assert config.api_verify_ssl is True
        assert config.state_file == "state.json"
        assert config.fallback_seed == 5
        assert config.use_fallback_only is False
        assert config.default_window_days == 15
        assert config.timezone == "UTC"
        assert config.log_level == "INFO"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.json"))

    def test_missing_section(self, write_config):
        with pytest.raises(ValueError, match="storage"):
            Config(write_config({"api": VALID_CONFIG["api"]}))

    def test_missing_key(self, write_config):
        data = {"api": {"base_url": "x", "timeout": 1}, "storage": {"state_file": "s.json"}}
        with pytest.raises(ValueError, match="api.max_retries"):
            Config(write_config(data))

    def test_non_positive_window(self, write_config):
        data = dict(VALID_CONFIG, timeline={"default_window_days": 0})
        with pytest.raises(ValueError):
            Config(write_config(data))

    def test_environment_overrides(self, write_config, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "https://override.test")
        monkeypatch.setenv("API_TIMEOUT", "99")
        monkeypatch.setenv("STATE_FILE", "/tmp/other.json")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = Config(write_config(VALID_CONFIG))

        assert config.api_base_url == "https://override.test"
        assert config.api_timeout == 99
        assert config.state_file == "/tmp/other.json"
        assert config.log_level == "DEBUG"

    def test_dotted_get(self, write_config):
        config = Config(write_config(VALID_CONFIG))
        assert config.get("weather.field") == "temperature_2m"
        assert config.get("weather.missing.deeper", "x") == "x"


class TestDateUtils:
    """Test date helpers."""

    def test_parse_iso_variants(self):
        a = DateUtils.parse_iso("2024-06-01T12:00")
        b = DateUtils.parse_iso("2024-06-01T12:00:00Z")
        c = DateUtils.parse_iso("2024-06-01T14:00:00+02:00")
        assert a == b == c
        assert a.utcoffset().total_seconds() == 0

    def test_parse_iso_rejects_garbage(self):
        with pytest.raises(ValueError):
            DateUtils.parse_iso("noon")

    def test_invalid_timezone(self):
        with pytest.raises(ValueError):
            DateUtils.parse_timezone("Mars/Olympus")

    def test_archive_date_is_utc(self):
        moment = DateUtils.parse_iso("2024-06-01T23:30:00-02:00")
        assert DateUtils.to_archive_date(moment) == "2024-06-02"

    def test_format_display(self):
        moment = DateUtils.parse_iso("2024-01-05T13:00:00Z")
        assert DateUtils.format_display(moment, "Europe/Berlin") == "Jan 05, 14:00"

    def test_hourly_steps_inclusive(self):
        start = DateUtils.parse_iso("2024-06-01T00:00Z")
        end = DateUtils.parse_iso("2024-06-01T03:00Z")

        assert len(DateUtils.hourly_steps(start, end)) == 4
        assert DateUtils.hourly_steps(end, start) == []

    def test_hourly_steps_interval(self):
        start = DateUtils.parse_iso("2024-06-01T00:00Z")
        end = DateUtils.parse_iso("2024-06-01T05:00Z")

        steps = DateUtils.hourly_steps(start, end, interval_hours=2)

        assert [step.hour for step in steps] == [0, 2, 4]
