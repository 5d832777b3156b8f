"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Business day starts at 03:00 (WIB); 00:00-02:59 belongs to the previous day.
DAY_RESET_HOUR = 3
MINUTES_PER_DAY = 24 * 60

# Extra attempts for a month fetch that failed with a transient error.
DEFAULT_FETCH_RETRIES = 2

DATE_FORMAT = "%Y-%m-%d"
