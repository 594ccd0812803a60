"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_COLLECTION = "attendance"
DEFAULT_REPORT_TIMEZONE = "UTC"

DAY_FORMAT = "%Y-%m-%d"
DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %I:%M %p"

OTHER_OPTION = "other"
DEFAULT_COMPANY_OPTIONS = ("Ramo", "Ember")
DEFAULT_SUPERVISOR_OPTIONS = ("Rajkumar", "Yubing", "Gao Shin ming", "Safety", "Rajesh", "Manoj")

EXPORT_COLUMNS = ("Date & Time", "Name", "Company", "Supervisor")
EXPORT_SHEET_NAME = "Attendance Records"
EXPORT_ALL_LABEL = "all"
