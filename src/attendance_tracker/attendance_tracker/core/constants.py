"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Synthesized for roster members without an attendance row; never stored.
UNMARKED = "unmarked"

DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_CLOSE_GRACE_MINUTES = 15

# Rate reported when the denominator is zero, per call site.
FACULTY_EMPTY_RATE = 0
STUDENT_DASHBOARD_EMPTY_RATE = 100

LATE_WEIGHT = 0.5

DASHBOARD_UPCOMING_LIMIT = 5

CSV_HEADER = ("Student Name", "Roll Number", "Session Date", "Status")
