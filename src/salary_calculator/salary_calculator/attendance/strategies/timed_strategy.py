from __future__ import annotations

import logging

from ...common.datetime_utils import parse_hhmm
from ...core.enums import DayStatus
from ...core.policy import OfficePolicy
from ..model import DayAttendance
from .absent_strategy import AbsentStrategy
from .base import DayDecision, DayStrategy

logger = logging.getLogger(__name__)


class TimedAttendanceStrategy(DayStrategy):
    """Both punches present: late arrival and early departure add up."""

    def __init__(self, fallback: DayStrategy | None = None):
        self._fallback = fallback or AbsentStrategy()

    def decide(self, day: DayAttendance, *, policy: OfficePolicy) -> DayDecision:
        try:
            in_minutes = parse_hhmm(day.in_time)
            out_minutes = parse_hhmm(day.out_time)
            if in_minutes is None or out_minutes is None:
                logger.debug("Day %s has unreadable punches %r/%r", day.day, day.in_time, day.out_time)
                return self._fallback.decide(day, policy=policy)

            late_by = max(0, in_minutes - policy.expected_in_minutes)
            early_by = max(0, policy.expected_out_minutes - out_minutes)
            return DayDecision(
                status=DayStatus.PRESENT,
                deficit_minutes=late_by + early_by,
                is_late=in_minutes > policy.expected_in_minutes,
                late_by=late_by,
                is_early=out_minutes < policy.expected_out_minutes,
                early_by=early_by,
            )
        except Exception:
            logger.debug("Day %s classification failed, treating as absent", day.day, exc_info=True)
            return self._fallback.decide(day, policy=policy)
