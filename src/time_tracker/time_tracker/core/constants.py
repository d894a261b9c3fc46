"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WORK_DAY_HOURS = 8

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 60 * MS_PER_MINUTE

UNKNOWN_PROJECT_NAME = "Unknown project"
DEFAULT_PROJECT_COLOR = "#6b7280"
PROJECT_NAME_MAX_LENGTH = 100

DATE_FORMAT = "%Y-%m-%d"
