from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import DayStatus
from ...core.policy import OfficePolicy
from ..model import DayAttendance


@dataclass(frozen=True)
class DayDecision:
    status: DayStatus
    deficit_minutes: int = 0
    is_late: bool = False
    late_by: int = 0
    is_early: bool = False
    early_by: int = 0


class DayStrategy(ABC):
    """Strategy Pattern: encapsulate how one day's status and deficit are decided."""

    @abstractmethod
    def decide(self, day: DayAttendance, *, policy: OfficePolicy) -> DayDecision:
        raise NotImplementedError
