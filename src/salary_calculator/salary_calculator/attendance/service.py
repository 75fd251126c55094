from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..core.policy import DEFAULT_POLICY, OfficePolicy
from .factory import DayStrategyFactory
from .model import DayAttendance, Employee


class AttendanceClassifier:
    """Finalizes status and deficit minutes for every day of an employee."""

    def __init__(
        self,
        *,
        strategy_factory: DayStrategyFactory | None = None,
        policy: OfficePolicy = DEFAULT_POLICY,
    ):
        self._factory = strategy_factory or DayStrategyFactory()
        self._policy = policy

    def classify_day(self, day: DayAttendance) -> DayAttendance:
        strategy = self._factory.for_day(day)
        decision = strategy.decide(day, policy=self._policy)
        return replace(
            day,
            status=decision.status,
            deficit_minutes=decision.deficit_minutes,
            is_late=decision.is_late,
            late_by=decision.late_by,
            is_early=decision.is_early,
            early_by=decision.early_by,
        )

    def classify(self, employee: Employee) -> Employee:
        return employee.with_attendance({d: self.classify_day(a) for d, a in employee.attendance.items()})

    def classify_all(self, employees: Iterable[Employee]) -> list[Employee]:
        return [self.classify(e) for e in employees]
