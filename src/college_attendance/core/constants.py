"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ATTENDANCE_THRESHOLD = 75.0
DEFAULT_PERIODS_PER_DAY = 7
UNKNOWN_SUBJECT = "Unknown"
OVERALL_LABEL = "Overall"
MIN_PASSWORD_LENGTH = 6
