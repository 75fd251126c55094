from __future__ import annotations

from enum import Enum


class DayStatus(str, Enum):
    """Final status of one tracked day on the attendance sheet."""

    PRESENT = "Present"
    ABSENT = "Absent"
    WFH = "WFH"
    WEEK_OFF = "Week Off"
    CL = "CL"
    HOLIDAY = "Holiday"

    @property
    def is_paid_leave(self) -> bool:
        """Fully paid days that never carry a deficit."""
        return self in PAID_STATUSES


PAID_STATUSES = frozenset({DayStatus.WFH, DayStatus.WEEK_OFF, DayStatus.CL, DayStatus.HOLIDAY})
