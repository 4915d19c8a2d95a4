"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

REGULAR_HOURS_CAP = 8
MINUTES_PER_DAY = 24 * 60

DEFAULT_WEEKENDS = (0, 6)
DEFAULT_SHIFT = "morning"
RESERVED_SHIFTS = ("morning", "night")
DEFAULT_SHIFTS = {
    "morning": {"start": "09:00", "end": "17:00"},
    "night": {"start": "21:00", "end": "05:00"},
}

# Reference times used for punctuality when scoring against fixed times.
# Any shift other than "morning" is scored against the night times.
FIXED_MORNING_TIMES = ("09:00", "17:00")
FIXED_NIGHT_TIMES = ("21:00", "05:00")

NEEDS_ATTENTION_BELOW_PERCENT = 80
RECENT_ACTIVITY_LIMIT = 10

BACKUP_VERSION = "2.0"
INSERT_BATCH_SIZE = 100
EMPLOYEE_ID_PREFIX = "EMP"
