from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...attendance.model import Employee
from ..model import SalaryCalculation


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        employee: Employee,
        buffer_days: Sequence[int] = (),
        *,
        total_days: Optional[int] = None,
    ) -> SalaryCalculation:
        raise NotImplementedError
