from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Union

from ..core.enums import DayStatus


@dataclass(frozen=True)
class DayAttendance:
    """One day of one employee, as read from the sheet and then classified."""

    day: int
    in_time: Optional[str]
    out_time: Optional[str]
    status: DayStatus = DayStatus.PRESENT
    deficit_minutes: int = 0
    is_late: bool = False
    late_by: int = 0
    is_early: bool = False
    early_by: int = 0

    @property
    def label(self) -> str:
        return f"Day {self.day}"

    @property
    def buffer_eligible(self) -> bool:
        """Only Present days with a deficit can receive buffer minutes."""
        return self.status == DayStatus.PRESENT and self.deficit_minutes > 0

    def with_out_time(self, out_time: Optional[str]) -> "DayAttendance":
        return replace(self, out_time=out_time)


@dataclass(frozen=True)
class Employee:
    """Transient employee built from one uploaded sheet (not a database record)."""

    employee_id: Union[int, str]
    name: str
    department: str
    salary: Union[int, float]
    attendance: Mapping[int, DayAttendance] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Identifier used in URLs and buffer selections."""
        return str(self.employee_id)

    def days(self) -> list[DayAttendance]:
        return [self.attendance[d] for d in sorted(self.attendance)]

    def with_attendance(self, attendance: Mapping[int, DayAttendance]) -> "Employee":
        return replace(self, attendance=dict(attendance))
