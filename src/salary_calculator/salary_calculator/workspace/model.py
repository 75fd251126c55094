from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.ingestor import Period
from ..attendance.model import Employee


@dataclass(frozen=True)
class SalarySheet:
    """Immutable snapshot of one successful upload."""

    employees: tuple[Employee, ...]
    days_in_month: int
    filename: str = ""
    period: Period = Period()

    def find(self, employee_key: str) -> Optional[Employee]:
        for employee in self.employees:
            if employee.key == str(employee_key):
                return employee
        return None


@dataclass
class SalaryWorkspace:
    """Per-session state: the current sheet and buffer days nominated per employee."""

    workspace_id: str
    sheet: Optional[SalarySheet] = None
    selections: dict[str, tuple[int, ...]] = field(default_factory=dict)

    def selection_for(self, employee_key: str) -> tuple[int, ...]:
        return self.selections.get(str(employee_key), ())
