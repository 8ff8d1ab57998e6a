"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_AUDIT_LOG_LIMIT = 20
DEFAULT_LESSON_HOUR = 1
PARENT_HISTORY_PREVIEW = 7

# Percentage reported when a recap has no records to count.
CLASS_RECAP_EMPTY_PERCENTAGE = 0
STUDENT_DETAIL_EMPTY_PERCENTAGE = 0
PARENT_OVERVIEW_EMPTY_PERCENTAGE = 100

GOOD_PRESENCE_ABOVE = 90
FAIR_PRESENCE_FROM = 75
PARENT_WARNING_BELOW = 85

ALL_CLASSES = "all"
