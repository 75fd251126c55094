from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import DayStatus
from .model import DayAttendance
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayStrategy
from .strategies.paid_leave_strategy import PaidLeaveStrategy
from .strategies.timed_strategy import TimedAttendanceStrategy


@dataclass
class DayStrategyFactory:
    """Factory Pattern: choose the strategy that decides a day."""

    paid_leave: DayStrategy = field(default_factory=PaidLeaveStrategy)
    absent: DayStrategy = field(default_factory=AbsentStrategy)
    timed: DayStrategy = field(default_factory=TimedAttendanceStrategy)

    def for_day(self, day: DayAttendance) -> DayStrategy:
        if day.status.is_paid_leave:
            return self.paid_leave
        if day.status == DayStatus.ABSENT or not day.in_time or not day.out_time:
            return self.absent
        return self.timed
