from __future__ import annotations

import io

import pandas as pd
import pytest

from src.salary_calculator.salary_calculator.core.enums import DayStatus
from src.salary_calculator.salary_calculator.core.exceptions import (
    BufferLimitError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from src.salary_calculator.salary_calculator.workspace.memory_workspace_repository import InMemoryWorkspaceRepository
from src.salary_calculator.salary_calculator.workspace.service import WorkspaceService


def _rows():
    # Asha: days 1-4 late by 10/20/30/40 minutes, day 5 week off, day 6 no punches.
    asha_in = {"1": "10:10", "2": "10:20", "3": "10:30", "4": "10:40", "5": "Week off", "6": None}
    asha_out = {"1": "6:30", "2": "6:30", "3": "6:30", "4": "6:30", "5": None, "6": None}
    ravi_in = {"1": "10:00", "2": "10:00", "3": "CL", "4": "10:00", "5": "Week off", "6": "Holiday"}
    ravi_out = {"1": "18:30", "2": "18:30", "3": None, "4": "18:30", "5": None, "6": None}
    base = {"S. No. ": None, "Employee Name": None, "Department": None, "Salary": None}
    return [
        {**base, "S. No. ": 1, "Employee Name": "Asha", "Department": "Sales", "Salary": 31000, "In/Out Time": "In Time", **asha_in},
        {**base, "In/Out Time": "Out Time", **asha_out},
        {**base, "S. No. ": 2, "Employee Name": "Ravi", "Department": "Ops", "Salary": "30000", "In/Out Time": "In Time", **ravi_in},
        {**base, "In/Out Time": "Out Time", **ravi_out},
    ]


@pytest.fixture
def service():
    svc = WorkspaceService(InMemoryWorkspaceRepository())
    svc.load_rows("ws", "Attendance_Jan_2025.xlsx", _rows())
    return svc


def test_load_builds_sheet(service):
    sheet = service.get_sheet("ws")
    assert sheet.days_in_month == 6
    assert sheet.period.month == "Jan"
    assert [e.name for e in sheet.employees] == ["Asha", "Ravi"]

    asha = service.get_employee("ws", "1")
    assert asha.employee.attendance[5].status == DayStatus.WEEK_OFF
    assert asha.employee.attendance[6].status == DayStatus.ABSENT
    assert asha.calculation.total_deficit_minutes == 10 + 20 + 30 + 40 + 510
    assert asha.calculation.total_days == 6


def test_toggle_adds_and_removes_buffer(service):
    after_add = service.toggle_buffer_day("ws", "1", 2)
    assert after_add.calculation.buffer_applied == 15
    assert service.get_employee("ws", "1").buffer_days == (2,)

    after_remove = service.toggle_buffer_day("ws", "1", 2)
    assert after_remove.calculation.buffer_applied == 0
    assert service.get_employee("ws", "1").buffer_days == ()


def test_fourth_buffer_day_is_rejected(service):
    for day in (1, 2, 3):
        service.toggle_buffer_day("ws", "1", day)

    with pytest.raises(BufferLimitError):
        service.toggle_buffer_day("ws", "1", 4)

    asha = service.get_employee("ws", "1")
    assert asha.buffer_days == (1, 2, 3)
    assert asha.calculation.buffer_applied == 10 + 15 + 15


def test_ineligible_days_cannot_be_nominated(service):
    with pytest.raises(ValidationError):
        service.toggle_buffer_day("ws", "1", 5)  # week off
    with pytest.raises(ValidationError):
        service.toggle_buffer_day("ws", "1", 6)  # absent
    with pytest.raises(ValidationError):
        service.toggle_buffer_day("ws", "2", 1)  # present, no deficit
    with pytest.raises(ValidationError):
        service.toggle_buffer_day("ws", "1", 30)


def test_toggle_only_touches_one_employee(service):
    before = service.get_employee("ws", "2").calculation

    service.toggle_buffer_day("ws", "1", 1)

    assert service.get_employee("ws", "2").calculation == before


def test_list_employees_filter(service):
    assert [s.employee.name for s in service.list_employees("ws")] == ["Asha", "Ravi"]
    assert [s.employee.name for s in service.list_employees("ws", "ops")] == ["Ravi"]
    assert [s.employee.name for s in service.list_employees("ws", "ASH")] == ["Asha"]
    assert service.list_employees("ws", "nobody") == []


def test_new_upload_replaces_state_and_selections(service):
    service.toggle_buffer_day("ws", "1", 1)

    service.load_rows("ws", "Attendance_Feb_2025.xlsx", _rows()[:2])

    assert [e.name for e in service.get_sheet("ws").employees] == ["Asha"]
    assert service.get_employee("ws", "1").buffer_days == ()


def test_failed_upload_keeps_previous_sheet(service):
    with pytest.raises(UploadError):
        service.load_rows("ws", "empty.xlsx", [{"Employee Name": "x"}])
    with pytest.raises(UploadError):
        service.upload("ws", "broken.xlsx", io.BytesIO(b"not a workbook"))

    assert service.get_sheet("ws").filename == "Attendance_Jan_2025.xlsx"


def test_upload_reads_workbook():
    frame = pd.DataFrame(_rows())
    buf = io.BytesIO()
    frame.to_excel(buf, index=False, engine="openpyxl")
    buf.seek(0)
    svc = WorkspaceService(InMemoryWorkspaceRepository())

    sheet = svc.upload("other", "Attendance_Jan_2025.xlsx", buf)

    assert len(sheet.employees) == 2
    assert svc.get_employee("other", "2").employee.salary == 30000


def test_unknown_workspace_and_employee(service):
    with pytest.raises(NotFoundError):
        service.get_sheet("missing")
    with pytest.raises(NotFoundError):
        service.get_employee("ws", "42")


def test_reset_discards_workspace(service):
    assert service.reset("ws") is True
    with pytest.raises(NotFoundError):
        service.list_employees("ws")


def test_exports(service):
    single = service.export_employee("ws", "1")
    everyone = service.export_all("ws")

    assert single.filename.startswith("Asha_Salary_Jan_2025_")
    assert everyone.filename.startswith("All_Employees_Salary_Jan_2025_")
    assert single.content[:2] == b"PK"
    assert everyone.content[:2] == b"PK"


class _UploadDuringToggleRepository(InMemoryWorkspaceRepository):
    """Lets another request store a workspace right before a toggle is applied."""

    def __init__(self):
        super().__init__()
        self.before_update = None

    def update(self, workspace_id, change):
        if self.before_update is not None:
            hook, self.before_update = self.before_update, None
            hook()
        return super().update(workspace_id, change)


def test_toggle_never_overwrites_a_newer_upload():
    repo = _UploadDuringToggleRepository()
    svc = WorkspaceService(repo)
    svc.load_rows("ws", "Attendance_Jan_2025.xlsx", _rows())
    repo.before_update = lambda: svc.load_rows("ws", "Attendance_Feb_2025.xlsx", _rows()[:2])

    svc.toggle_buffer_day("ws", "1", 2)

    sheet = svc.get_sheet("ws")
    assert sheet.filename == "Attendance_Feb_2025.xlsx"
    assert [e.name for e in sheet.employees] == ["Asha"]
    assert svc.get_employee("ws", "1").buffer_days == (2,)


def test_toggle_keeps_a_concurrent_selection():
    repo = _UploadDuringToggleRepository()
    svc = WorkspaceService(repo)
    svc.load_rows("ws", "Attendance_Jan_2025.xlsx", _rows())
    repo.before_update = lambda: svc.toggle_buffer_day("ws", "1", 1)

    svc.toggle_buffer_day("ws", "1", 2)

    assert svc.get_employee("ws", "1").buffer_days == (1, 2)


def test_failed_toggle_leaves_selections_untouched(service):
    service.toggle_buffer_day("ws", "1", 1)

    with pytest.raises(ValidationError):
        service.toggle_buffer_day("ws", "1", 5)

    assert service.get_employee("ws", "1").buffer_days == (1,)


def test_toggle_without_upload_is_not_found():
    svc = WorkspaceService(InMemoryWorkspaceRepository())
    with pytest.raises(NotFoundError):
        svc.toggle_buffer_day("nobody", "1", 1)


def test_duplicate_employee_numbers_are_rejected(service):
    rows = _rows()
    rows[2] = {**rows[2], "S. No. ": 1}

    with pytest.raises(UploadError, match="Duplicate employee numbers"):
        service.load_rows("ws", "Attendance_Mar_2025.xlsx", rows)

    assert service.get_sheet("ws").filename == "Attendance_Jan_2025.xlsx"
