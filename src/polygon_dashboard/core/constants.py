"""
Application-wide constants for the polygon dashboard.

This module defines default values shared by the store, the processing
pipeline and the sample provider.
"""

# Colour returned when no rule matches a value
FALLBACK_COLOR = "#cccccc"

# Colour of a polygon whose value has not been computed yet
DEFAULT_POLYGON_COLOR = "#3388ff"

# Aggregated values are rounded to this many decimal places
VALUE_DECIMALS = 1

# Supported rule operators, in display order
RULE_OPERATORS = ("=", "<", ">", "<=", ">=")

# Default map view (Berlin)
DEFAULT_MAP_CENTER = (52.52, 13.41)
DEFAULT_MAP_ZOOM = 10

# Timeline spans this many days on each side of "now"
DEFAULT_WINDOW_DAYS = 15

# Sample provider resolution
SAMPLE_INTERVAL_HOURS = 1

# Default weather field requested from the archive
DEFAULT_WEATHER_FIELD = "temperature_2m"

# Open-Meteo historical archive
DEFAULT_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

# Synthetic fallback series shape (°C)
FALLBACK_BASE_VALUE = 15.0
FALLBACK_AMPLITUDE = 10.0
FALLBACK_JITTER = 5.0
FALLBACK_PERIOD_MS = 24 * 60 * 60 * 1000

# Base colour palette offered for new rules
BASE_PALETTE = (
    "#ff4444",  # Red
    "#4444ff",  # Blue
    "#44ff44",  # Green
    "#ffff44",  # Yellow
    "#ff44ff",  # Magenta
    "#44ffff",  # Cyan
    "#ff8844",  # Orange
    "#8844ff",  # Purple
    "#44ff88",  # Light Green
    "#ff4488",  # Pink
)

# Golden angle approximation used for palette colours beyond the base set
GOLDEN_ANGLE = 137.5
