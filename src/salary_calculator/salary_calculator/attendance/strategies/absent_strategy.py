from __future__ import annotations

from ...core.enums import DayStatus
from ...core.policy import OfficePolicy
from ..model import DayAttendance
from .base import DayDecision, DayStrategy


class AbsentStrategy(DayStrategy):
    """Missing or unreadable punches: a full scheduled day is owed."""

    def decide(self, day: DayAttendance, *, policy: OfficePolicy) -> DayDecision:
        return DayDecision(status=DayStatus.ABSENT, deficit_minutes=policy.expected_work_minutes)
