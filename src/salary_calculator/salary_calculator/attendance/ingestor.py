from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from pathlib import PurePath
from typing import IO, Any, Iterable, Mapping, Optional, Sequence, Union

import pandas as pd

from ..common.datetime_utils import today_local
from ..core import constants
from ..core.enums import DayStatus
from ..core.exceptions import UploadError
from .model import DayAttendance, Employee
from .normalizer import is_blank, normalize_cell

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


@dataclass(frozen=True)
class Period:
    """Month/year label parsed from the upload filename (display only)."""

    month: str = ""
    year: str = ""

    @property
    def label(self) -> str:
        return f"{self.month}_{self.year}" if self.month and self.year else ""


def header_key(header: Any) -> str:
    if isinstance(header, numbers.Real) and not isinstance(header, bool):
        if float(header).is_integer():
            return str(int(header))
    return str(header).strip()


def read_workbook(stream: IO[bytes]) -> list[dict[str, Any]]:
    """Read the first worksheet into one mapping per row, keyed by header text."""
    try:
        frame = pd.read_excel(stream, sheet_name=0)
    except Exception as exc:
        raise UploadError("Could not read the uploaded workbook") from exc

    frame.columns = [header_key(c) for c in frame.columns]
    return frame.to_dict(orient="records")


def detect_days_in_month(headers: Iterable[Any]) -> int:
    """Highest day-number column in [1, 31]; 31 when the sheet has none."""
    days = []
    for header in headers:
        try:
            day = int(header_key(header))
        except ValueError:
            continue
        if 1 <= day <= constants.MAX_DAYS_IN_MONTH:
            days.append(day)
    return max(days) if days else constants.DEFAULT_DAYS_IN_MONTH


def parse_salary(value: Any) -> Union[int, float]:
    """Monthly salary from a cell; blank, unparseable or negative values become 0."""
    if is_blank(value) or isinstance(value, bool):
        return constants.DEFAULT_SALARY

    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except ValueError:
            logger.warning("Unparseable salary %r, using %s", value, constants.DEFAULT_SALARY)
            return constants.DEFAULT_SALARY

    if math.isnan(number) or math.isinf(number) or number < 0:
        logger.warning("Invalid salary %r, using %s", value, constants.DEFAULT_SALARY)
        return constants.DEFAULT_SALARY
    return int(number) if number.is_integer() else number


def parse_period(filename: Optional[str]) -> Period:
    """``Attendance_Jan_2025.xlsx`` -> Period("Jan", "2025")."""
    if not filename:
        return Period()
    parts = PurePath(filename).name.split("_")
    if len(parts) < 2 or not parts[1]:
        return Period()

    month = parts[1].split(".")[0]
    year = parts[2].split(".")[0] if len(parts) > 2 else ""
    return Period(month=month, year=year or str(today_local().year))


def _coerce_id(value: Any) -> Union[int, str]:
    if isinstance(value, numbers.Real) and not isinstance(value, bool) and float(value).is_integer():
        return int(value)
    text = str(value).strip()
    return int(text) if text.isdigit() else text


def _text(value: Any) -> str:
    return "" if is_blank(value) else str(value).strip()


def _sequence_column(headers: Iterable[str]) -> Optional[str]:
    for header in headers:
        compact = header.lower().replace(" ", "").replace(".", "")
        if compact in constants.SEQUENCE_COLUMN_KEYS:
            return header
    return None


class SheetIngestor:
    """Turns sheet rows (an "In Time" row optionally followed by its "Out Time" row)
    into employees with unclassified attendance."""

    def ingest(self, rows: Sequence[Row], days_in_month: Optional[int] = None) -> list[Employee]:
        if not rows:
            return []

        rows = [{header_key(k): v for k, v in row.items()} for row in rows]
        headers = list(dict.fromkeys(k for row in rows for k in row))
        if days_in_month is None:
            days_in_month = detect_days_in_month(headers)
        seq_column = _sequence_column(headers)
        if seq_column is None:
            logger.warning("No sequence-number column among headers %s", headers)
            return []

        employees: list[Employee] = []
        i = 0
        while i < len(rows):
            row = rows[i]
            if not self._is_employee_row(row, seq_column):
                i += 1
                continue

            attendance = self._read_in_times(row, days_in_month)
            next_row = rows[i + 1] if i + 1 < len(rows) else None
            if next_row is not None and self._is_out_row(next_row):
                attendance = self._read_out_times(next_row, attendance)
                i += 1

            employees.append(
                Employee(
                    employee_id=_coerce_id(row[seq_column]),
                    name=str(row[constants.NAME_COLUMN]).strip(),
                    department=_text(row.get(constants.DEPARTMENT_COLUMN)),
                    salary=parse_salary(row.get(constants.SALARY_COLUMN)),
                    attendance=attendance,
                )
            )
            i += 1

        logger.info("Ingested %d employees over %d days", len(employees), days_in_month)
        return employees

    @staticmethod
    def _is_employee_row(row: Row, seq_column: str) -> bool:
        name = row.get(constants.NAME_COLUMN)
        return not is_blank(name) and not is_blank(row.get(seq_column))

    @staticmethod
    def _is_out_row(row: Row) -> bool:
        marker = row.get(constants.MARKER_COLUMN)
        return isinstance(marker, str) and marker.strip() == constants.OUT_TIME_MARKER

    @staticmethod
    def _read_in_times(row: Row, days_in_month: int) -> dict[int, DayAttendance]:
        attendance: dict[int, DayAttendance] = {}
        for day in range(1, days_in_month + 1):
            cell = normalize_cell(row.get(str(day)), is_out_time=False)
            status = cell.status or DayStatus.PRESENT
            attendance[day] = DayAttendance(
                day=day,
                in_time=cell.value if status == DayStatus.PRESENT else None,
                out_time=None,
                status=status,
            )
        return attendance

    @staticmethod
    def _read_out_times(row: Row, attendance: dict[int, DayAttendance]) -> dict[int, DayAttendance]:
        updated = dict(attendance)
        for day, entry in attendance.items():
            # Paid-leave days keep no punches.
            if entry.status != DayStatus.PRESENT:
                continue
            cell = normalize_cell(row.get(str(day)), is_out_time=True)
            updated[day] = entry.with_out_time(cell.value)
        return updated
