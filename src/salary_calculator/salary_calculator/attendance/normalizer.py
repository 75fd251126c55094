"""Cell normalization for attendance sheets.

Every day cell of the uploaded sheet goes through :func:`normalize_cell`,
which is the only place that sniffs status tokens ("Week off", "WFH", ...)
out of free text.
"""
from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Optional

import pandas as pd

from ..common.datetime_utils import format_hhmm
from ..core.enums import DayStatus

_CLOCK_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")


@dataclass(frozen=True)
class NormalizedCell:
    """Result of reading one cell.

    At most one of ``status`` / ``time`` / ``text`` is set; all three unset
    means the cell was empty.
    """

    status: Optional[DayStatus] = None
    time: Optional[str] = None
    text: Optional[str] = None

    @property
    def value(self) -> Optional[str]:
        """Value stored as the raw in/out time of a day."""
        return self.time if self.time is not None else self.text


EMPTY = NormalizedCell()


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def status_from_text(text: str) -> Optional[DayStatus]:
    lowered = text.strip().lower()
    if "week off" in lowered:
        return DayStatus.WEEK_OFF
    if "wfh" in lowered or "work from home" in lowered:
        return DayStatus.WFH
    if lowered == "cl" or "casual leave" in lowered:
        return DayStatus.CL
    if "holiday" in lowered:
        return DayStatus.HOLIDAY
    return None


def _clock(hours: int, minutes: int, is_out_time: bool) -> str:
    # Out punches are often written on a 12-hour clock: 06:15 means 18:15.
    if is_out_time and 1 <= hours < 12:
        hours += 12
    return format_hhmm(hours, minutes)


def _from_number(value: float, is_out_time: bool) -> NormalizedCell:
    # 9.35 encodes 09:35: integer part is hours, two decimals are minutes.
    if value < 0:
        return NormalizedCell(text=f"{value:g}")
    hours = int(math.floor(value))
    # Two decimals at most; 9.996 must not round up into a three-digit field.
    minutes = min(int(round((value - hours) * 100)), 99)
    return NormalizedCell(time=_clock(hours, minutes, is_out_time))


def normalize_cell(value: Any, *, is_out_time: bool = False) -> NormalizedCell:
    """Interpret a raw sheet cell as a status token, a clock time or free text.

    Never raises: anything that cannot be interpreted comes back as ``text``.
    """
    if is_blank(value):
        return EMPTY
    if isinstance(value, bool):
        return NormalizedCell(text=str(value))
    if isinstance(value, numbers.Real) and value == 0:
        return EMPTY

    if isinstance(value, (datetime, time)):
        return NormalizedCell(time=_clock(value.hour, value.minute, is_out_time))

    if isinstance(value, str):
        text = value.strip()
        if text.lower() == "week off":
            return NormalizedCell(status=DayStatus.WEEK_OFF)

        status = status_from_text(text)
        if status is not None:
            return NormalizedCell(status=status)

        if _CLOCK_RE.match(text):
            hours, minutes = text.split(":")[:2]
            return NormalizedCell(time=_clock(int(hours), int(minutes), is_out_time))

        try:
            number = float(text)
        except ValueError:
            return NormalizedCell(text=text)
        if math.isnan(number) or math.isinf(number):
            return NormalizedCell(text=text)
        return _from_number(number, is_out_time)

    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isinf(number):
            return NormalizedCell(text=str(value))
        return _from_number(number, is_out_time)

    return NormalizedCell(text=str(value))
