from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Union

from ..attendance.model import Employee

Number = Union[int, float]


@dataclass(frozen=True)
class SalaryCalculation:
    """Derived payroll figures for one employee; recomputed, never stored."""

    total_days: int
    working_days: int
    present_days: int
    wfh_days: int
    week_off_days: int
    absent_days: int
    cl_days: int
    holiday_days: int
    total_deficit_minutes: int
    buffer_applied: int
    days_with_buffer: tuple[int, ...]
    final_deficit: int
    per_day_salary: float
    per_minute_rate: float
    deduction: int
    final_salary: Number

    def to_dict(self) -> dict:
        data = asdict(self)
        data["days_with_buffer"] = list(self.days_with_buffer)
        return data


@dataclass(frozen=True)
class EmployeeSalary:
    """An employee together with its current buffer selection and calculation."""

    employee: Employee
    buffer_days: tuple[int, ...]
    calculation: SalaryCalculation

    def buffer_applied_on(self, day: int) -> bool:
        att = self.employee.attendance.get(day)
        return day in self.buffer_days and att is not None and att.buffer_eligible
