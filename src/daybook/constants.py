"""Centralized constants for Daybook."""

from datetime import time, timedelta

# Timed events without an end time
DEFAULT_EVENT_DURATION = timedelta(hours=1)

# Recurrence expansion never walks further than this from the seed date
RECURRENCE_HORIZON_YEARS = 5

# Series created from a template without times
DEFAULT_SERIES_START_TIME = time(9, 0)
DEFAULT_SERIES_END_TIME = time(10, 0)
