"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

from .enums import Role

SYSTEM_TITLE = "College Attendance System"
REPORT_TITLE = "Attendance Report"

DEFAULT_LOCATION = "TBD"
NO_RECORD_ID = "none"

STAFF_ROLES = frozenset({Role.TEACHER, Role.HOD, Role.ADMIN, Role.SUPER_ADMIN})

SPREADSHEET_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DOCUMENT_MIMETYPE = "application/pdf"

TIME_FORMAT = "%I:%M %p"
DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
