from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..attendance.model import DayAttendance, Employee
from ..core.policy import DEFAULT_POLICY, OfficePolicy
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import EmployeeSalary


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class PayrollReportService:
    def __init__(
        self,
        *,
        calculator: Optional[SalaryCalculator] = None,
        policy: OfficePolicy = DEFAULT_POLICY,
    ):
        self._calculator = calculator or StandardSalaryCalculator(policy)

    def salary_for(
        self,
        employee: Employee,
        buffer_days: Sequence[int] = (),
        *,
        total_days: Optional[int] = None,
    ) -> EmployeeSalary:
        calculation = self._calculator.calculate(employee, buffer_days, total_days=total_days)
        return EmployeeSalary(employee=employee, buffer_days=tuple(buffer_days), calculation=calculation)

    def salaries_for(
        self,
        employees: Sequence[Employee],
        selections: Mapping[str, Sequence[int]],
        *,
        total_days: Optional[int] = None,
    ) -> list[EmployeeSalary]:
        return [self.salary_for(e, selections.get(e.key, ()), total_days=total_days) for e in employees]

    def build_report(self, salaries: Sequence[EmployeeSalary]) -> ReportData:
        """Data handed to the spreadsheet writers and the JSON API."""
        rows = [self.employee_row(s) for s in salaries]
        summary = {
            "employees": len(rows),
            "total_base_salary": sum(s.employee.salary for s in salaries),
            "total_deduction": sum(s.calculation.deduction for s in salaries),
            "grand_total": sum(s.calculation.final_salary for s in salaries),
        }
        return ReportData(rows=rows, summary=summary)

    def employee_row(self, salary: EmployeeSalary, *, with_days: bool = True) -> dict:
        e = salary.employee
        row = {
            "id": e.employee_id,
            "name": e.name,
            "department": e.department,
            "salary": e.salary,
            "calculation": salary.calculation.to_dict(),
        }
        if with_days:
            row["days"] = [self.day_row(a, salary.buffer_applied_on(a.day)) for a in e.days()]
        return row

    @staticmethod
    def day_row(att: DayAttendance, buffer_applied: bool) -> dict:
        return {
            "day": att.day,
            "date": att.label,
            "status": att.status.value,
            "in_time": att.in_time,
            "out_time": att.out_time,
            "is_late": att.is_late,
            "late_by": att.late_by,
            "is_early": att.is_early,
            "early_by": att.early_by,
            "deficit_minutes": att.deficit_minutes,
            "buffer_eligible": att.buffer_eligible,
            "buffer_applied": buffer_applied,
        }
