"""
PocketCalc Configuration Settings
"""
import logging
import os

# Application Settings
APP_NAME = "PocketCalc"
VERSION = "1.0.0"

# Display Settings
ERROR_TEXT = "Error"
GROUPING_SEPARATOR = ","

# Calculation Settings
RESULT_PRECISION = 10   # fractional digits kept in results

# History Settings
MAX_HISTORY_ITEMS = 50

# Preference defaults (theme and sound are rendered by the UI, only stored here)
THEMES = ("dark", "light")
DEFAULT_THEME = "dark"
DEFAULT_SOUND_ON = True

# Database Settings
DB_PATH = os.environ.get(
    "POCKETCALC_DB_PATH",
    os.path.join(os.path.dirname(__file__), "pocketcalc.db"),
)

# Logging Settings
LOG_LEVEL = os.environ.get("POCKETCALC_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Install a basic log handler for applications embedding the engine."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
