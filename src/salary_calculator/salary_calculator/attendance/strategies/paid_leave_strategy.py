from __future__ import annotations

from ...core.policy import OfficePolicy
from ..model import DayAttendance
from .base import DayDecision, DayStrategy


class PaidLeaveStrategy(DayStrategy):
    """Week Off, WFH, CL and Holiday: fully paid, never a deficit."""

    def decide(self, day: DayAttendance, *, policy: OfficePolicy) -> DayDecision:
        return DayDecision(status=day.status)
