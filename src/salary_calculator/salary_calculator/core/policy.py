from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class OfficePolicy:
    """Office hours and grace rules used by classification and payroll."""

    office_start_hour: int = constants.OFFICE_START_HOUR
    office_end_hour: int = constants.OFFICE_END_HOUR
    office_end_minute: int = constants.OFFICE_END_MINUTE
    expected_work_minutes: int = constants.EXPECTED_WORK_MINUTES
    buffer_minutes: int = constants.BUFFER_MINUTES
    max_buffer_days: int = constants.MAX_BUFFER_DAYS

    @property
    def expected_in_minutes(self) -> int:
        return self.office_start_hour * 60

    @property
    def expected_out_minutes(self) -> int:
        return self.office_end_hour * 60 + self.office_end_minute

    @classmethod
    def from_settings(cls, settings) -> "OfficePolicy":
        defaults = cls()
        return cls(
            office_start_hour=int(getattr(settings, "OFFICE_START_HOUR", defaults.office_start_hour)),
            office_end_hour=int(getattr(settings, "OFFICE_END_HOUR", defaults.office_end_hour)),
            office_end_minute=int(getattr(settings, "OFFICE_END_MINUTE", defaults.office_end_minute)),
            expected_work_minutes=int(getattr(settings, "EXPECTED_WORK_MINUTES", defaults.expected_work_minutes)),
            buffer_minutes=int(getattr(settings, "BUFFER_MINUTES", defaults.buffer_minutes)),
            max_buffer_days=int(getattr(settings, "MAX_BUFFER_DAYS", defaults.max_buffer_days)),
        )


DEFAULT_POLICY = OfficePolicy()
