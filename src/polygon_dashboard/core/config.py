"""
Configuration module for the polygon dashboard.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("API_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("API_BASE_URL")

        if os.getenv("API_TIMEOUT"):
            self.config.setdefault("api", {})["timeout"] = int(os.getenv("API_TIMEOUT"))

        if os.getenv("STATE_FILE"):
            self.config.setdefault("storage", {})["state_file"] = os.getenv("STATE_FILE")

        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["base_url", "timeout", "max_retries"],
            "storage": ["state_file"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        if self.default_window_days <= 0:
            raise ValueError(
                f"timeline.default_window_days must be positive, got {self.default_window_days}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get archive API base URL."""
        return self.get("api.base_url", constants.DEFAULT_ARCHIVE_URL)

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", 3)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def weather_field(self) -> str:
        """Get the hourly field requested from the archive."""
        return self.get("weather.field", constants.DEFAULT_WEATHER_FIELD)

    @property
    def use_fallback_only(self) -> bool:
        """Skip the network and always use the synthetic series."""
        return self.get("weather.use_fallback_only", False)

    @property
    def fallback_seed(self) -> Optional[int]:
        """Seed for the synthetic series jitter (None for random)."""
        return self.get("weather.fallback_seed")

    @property
    def state_file(self) -> str:
        """Get path of the persisted dashboard state."""
        return self.get("storage.state_file", "dashboard_state.json")

    @property
    def timezone(self) -> str:
        """Get display timezone."""
        return self.get("timeline.timezone", "UTC")

    @property
    def default_window_days(self) -> int:
        """Get number of days the timeline spans on each side of now."""
        return self.get("timeline.default_window_days", constants.DEFAULT_WINDOW_DAYS)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
