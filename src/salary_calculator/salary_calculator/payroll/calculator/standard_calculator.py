from __future__ import annotations

import math
from collections import Counter
from typing import Optional, Sequence

from ...attendance.model import Employee
from ...core.enums import DayStatus
from ...core.policy import DEFAULT_POLICY, OfficePolicy
from ..model import SalaryCalculation
from .base import SalaryCalculator


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def truncate_cents(value: float) -> float:
    """Floor to 2 decimals (2.0261 -> 2.02)."""
    return math.floor(value * 100) / 100


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: base salary minus (deficit - buffer) minutes at a per-minute rate.

    The per-minute rate is floored to 2 decimals while the deduction is rounded
    to the nearest integer.
    """

    def __init__(self, policy: OfficePolicy = DEFAULT_POLICY):
        self._policy = policy

    def buffer_for_day(self, employee: Employee, day: int) -> int:
        att = employee.attendance.get(day)
        if att is None or not att.buffer_eligible:
            return 0
        return min(att.deficit_minutes, self._policy.buffer_minutes)

    def calculate(
        self,
        employee: Employee,
        buffer_days: Sequence[int] = (),
        *,
        total_days: Optional[int] = None,
    ) -> SalaryCalculation:
        days = list(employee.attendance.values())
        counts = Counter(d.status for d in days)
        if total_days is None:
            total_days = len(days)

        total_deficit = sum(d.deficit_minutes for d in days)
        # The selection layer caps the list; here whatever is nominated is summed.
        buffer_applied = sum(self.buffer_for_day(employee, day) for day in buffer_days)
        final_deficit = max(0, total_deficit - buffer_applied)

        per_day_salary = employee.salary / total_days if total_days > 0 else 0.0
        per_minute_rate = truncate_cents(per_day_salary / self._policy.expected_work_minutes)
        deduction = round_half_up(final_deficit * per_minute_rate)

        week_off_days = counts[DayStatus.WEEK_OFF]
        return SalaryCalculation(
            total_days=total_days,
            working_days=total_days - week_off_days,
            present_days=counts[DayStatus.PRESENT],
            wfh_days=counts[DayStatus.WFH],
            week_off_days=week_off_days,
            absent_days=counts[DayStatus.ABSENT],
            cl_days=counts[DayStatus.CL],
            holiday_days=counts[DayStatus.HOLIDAY],
            total_deficit_minutes=total_deficit,
            buffer_applied=buffer_applied,
            days_with_buffer=tuple(buffer_days),
            final_deficit=final_deficit,
            per_day_salary=per_day_salary,
            per_minute_rate=per_minute_rate,
            deduction=deduction,
            final_salary=employee.salary - deduction,
        )


def compute_salary(
    employee: Employee,
    buffer_days: Sequence[int] = (),
    *,
    total_days: Optional[int] = None,
    policy: OfficePolicy = DEFAULT_POLICY,
) -> SalaryCalculation:
    """Pure function of attendance and buffer selection."""
    return StandardSalaryCalculator(policy).calculate(employee, buffer_days, total_days=total_days)
