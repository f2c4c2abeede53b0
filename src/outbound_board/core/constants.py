"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ADMIN_ACTOR = "admin"
DEFAULT_PLACE = "(unspecified)"
DEFAULT_LOG_WINDOW = 50
MAX_LOG_LIMIT = 500
DEFAULT_TICK_SECONDS = 60
DEFAULT_SESSION_HOURS = 24
DEFAULT_STREAM_QUEUE = 8
MIN_PIN_LENGTH = 4
