"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EXPECTED_WORK_MINUTES = 510  # 8.5 scheduled hours
BUFFER_MINUTES = 15
MAX_BUFFER_DAYS = 3
DEFAULT_SALARY = 0

OFFICE_START_HOUR = 10
OFFICE_END_HOUR = 18
OFFICE_END_MINUTE = 30

DEFAULT_DAYS_IN_MONTH = 31
MAX_DAYS_IN_MONTH = 31

# Worksheet headers
NAME_COLUMN = "Employee Name"
DEPARTMENT_COLUMN = "Department"
SALARY_COLUMN = "Salary"
MARKER_COLUMN = "In/Out Time"
OUT_TIME_MARKER = "Out Time"
# Compared after lowercasing and dropping spaces and dots ("S. No. " -> "sno").
SEQUENCE_COLUMN_KEYS = ("sno", "srno", "slno", "serialno", "id", "empid", "employeeid")
