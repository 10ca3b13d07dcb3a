"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_DAYS = 7

# The dashboard looks for the open session among this many recent entries.
OPEN_SESSION_LOOKBACK = 25
DEFAULT_RECENT_ENTRIES = 10

SECONDS_PER_HOUR = 3600

# Largest id/limit the storage backends accept (signed 64-bit).
MAX_DB_INT = 2**63 - 1
