"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PRESENT_HOURS = 8.0
DEFAULT_HALF_DAY_HOURS = 4.0
DEFAULT_SHIFT_EFFECTIVE_HOURS = 8.0
DEFAULT_SHIFT_BREAK_HOURS = 1.0

DEFAULT_LATE_GRACE_MINUTES = 0

SHORT_PUNCH_HOURS = 5 / 60
EXCESSIVE_PUNCH_COUNT = 20

DEFAULT_LOG_LIMIT = 50
DEFAULT_LOG_SKIP = 0

WEB_PREMISE_NAME = "Web Clock In"
