"""Runtime settings read from the environment, with defaults for a local install."""

import logging
import os

logger = logging.getLogger(__name__)


def get_setting(name: str, default=None):
    # environment first, then the built-in default
    value = os.getenv(name)
    return value if value not in (None, "") else default


def get_int(name: str, default: int) -> int:
    raw = get_setting(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using %s", name, raw, default)
        return default


DATA_PATH = get_setting("HABIT_DATA_PATH", "data/routines.json")
DEFAULT_DAY_OFF_LIMIT = get_int("HABIT_DAY_OFF_LIMIT", 3)
# local storage in browsers gives roughly 5 MB per origin
STORAGE_QUOTA_BYTES = get_int("HABIT_STORAGE_QUOTA", 5 * 1024 * 1024)
STREAKS_PORT = get_int("HABIT_STREAKS_PORT", 5555)
SERVICE_TIMEOUT_MS = get_int("HABIT_SERVICE_TIMEOUT_MS", 1500)
LOG_LEVEL = get_setting("HABIT_LOG_LEVEL", "INFO")


def configure_logging(level=None):
    """Basic console logging for the app and the microservice entry points."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
