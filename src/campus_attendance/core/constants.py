"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DEFAULTER_THRESHOLD = 75
DEFAULT_SEMESTER = 1
MIN_PASSWORD_LENGTH = 6
NO_STUDENTS_TO_PROMOTE = "No students to promote"
