from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import IO, Optional

from ..attendance.ingestor import SheetIngestor, detect_days_in_month, parse_period, read_workbook
from ..attendance.service import AttendanceClassifier
from ..core.exceptions import BufferLimitError, DomainError, NotFoundError, UploadError, ValidationError
from ..core.policy import DEFAULT_POLICY, OfficePolicy
from ..payroll import export
from ..payroll.model import EmployeeSalary
from ..payroll.service import PayrollReportService, ReportData
from .model import SalarySheet, SalaryWorkspace
from .repository import WorkspaceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = export.XLSX_MIMETYPE


class WorkspaceService:
    """Session-scoped salary workflow: upload, buffer selection, reporting."""

    def __init__(
        self,
        workspaces: WorkspaceRepository,
        *,
        ingestor: SheetIngestor | None = None,
        classifier: AttendanceClassifier | None = None,
        reports: PayrollReportService | None = None,
        policy: OfficePolicy = DEFAULT_POLICY,
    ):
        self._workspaces = workspaces
        self._ingestor = ingestor or SheetIngestor()
        self._classifier = classifier or AttendanceClassifier(policy=policy)
        self._reports = reports or PayrollReportService(policy=policy)
        self._policy = policy

    # ---- upload -------------------------------------------------------
    def upload(self, workspace_id: str, filename: str, stream: IO[bytes]) -> SalarySheet:
        """Ingest a workbook and replace the workspace; on failure nothing changes."""
        rows = read_workbook(stream)
        return self.load_rows(workspace_id, filename, rows)

    def load_rows(self, workspace_id: str, filename: str, rows: list[dict]) -> SalarySheet:
        try:
            days_in_month = detect_days_in_month(k for row in rows for k in row)
            employees = self._ingestor.ingest(rows, days_in_month)
            employees = self._classifier.classify_all(employees)
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("Upload %r failed for workspace %s", filename, workspace_id)
            raise UploadError("Could not process the uploaded workbook") from exc

        if not employees:
            raise UploadError("No employee rows found in the uploaded workbook")
        duplicates = sorted(key for key, n in Counter(e.key for e in employees).items() if n > 1)
        if duplicates:
            raise UploadError(f"Duplicate employee numbers in the uploaded workbook: {', '.join(duplicates)}")

        sheet = SalarySheet(
            employees=tuple(employees),
            days_in_month=days_in_month,
            filename=filename or "",
            period=parse_period(filename),
        )
        self._workspaces.save(SalaryWorkspace(workspace_id=workspace_id, sheet=sheet))
        logger.info("Workspace %s loaded %d employees from %r", workspace_id, len(employees), filename)
        return sheet

    def reset(self, workspace_id: str) -> bool:
        return self._workspaces.delete(workspace_id)

    # ---- queries ------------------------------------------------------
    def get_sheet(self, workspace_id: str) -> SalarySheet:
        return self._require_sheet(self._require_workspace(workspace_id))

    def list_employees(self, workspace_id: str, query: str = "") -> list[EmployeeSalary]:
        ws = self._require_workspace(workspace_id)
        sheet = self._require_sheet(ws)
        needle = (query or "").strip().lower()
        employees = [
            e for e in sheet.employees if not needle or needle in e.name.lower() or needle in e.department.lower()
        ]
        return self._reports.salaries_for(employees, ws.selections, total_days=sheet.days_in_month)

    def get_employee(self, workspace_id: str, employee_id: str) -> EmployeeSalary:
        ws = self._require_workspace(workspace_id)
        sheet = self._require_sheet(ws)
        employee = sheet.find(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return self._reports.salary_for(employee, ws.selection_for(employee.key), total_days=sheet.days_in_month)

    def report(self, workspace_id: str) -> ReportData:
        return self._reports.build_report(self.list_employees(workspace_id))

    def employee_row(self, salary: EmployeeSalary, *, with_days: bool = True) -> dict:
        return self._reports.employee_row(salary, with_days=with_days)

    # ---- buffer selection ---------------------------------------------
    def toggle_buffer_day(self, workspace_id: str, employee_id: str, day: int) -> EmployeeSalary:
        """Nominate or un-nominate a day for buffer, recomputing only this employee.

        The selection is read and written under the repository lock against the
        sheet current at that moment, so a concurrent upload or toggle is never
        overwritten.
        """
        found: dict = {}

        def change(ws: Optional[SalaryWorkspace]) -> SalaryWorkspace:
            if ws is None:
                raise NotFoundError("No attendance sheet uploaded yet")
            sheet = self._require_sheet(ws)
            employee = sheet.find(employee_id)
            if employee is None:
                raise NotFoundError(f"Employee {employee_id} not found")

            selected = list(ws.selection_for(employee.key))
            if day in selected:
                selected.remove(day)
            else:
                att = employee.attendance.get(day)
                if att is None:
                    raise ValidationError(f"Day {day} is not on the sheet")
                if not att.buffer_eligible:
                    raise ValidationError(f"Day {day} has no deficit on a present day")
                if len(selected) >= self._policy.max_buffer_days:
                    raise BufferLimitError(
                        f"You can only select up to {self._policy.max_buffer_days} days for buffer"
                    )
                selected.append(day)

            ws.selections[employee.key] = tuple(selected)
            found.update(employee=employee, selected=tuple(selected), total_days=sheet.days_in_month)
            return ws

        self._workspaces.update(workspace_id, change)
        logger.info("Workspace %s employee %s buffer days -> %s", workspace_id, found["employee"].key, list(found["selected"]))
        return self._reports.salary_for(found["employee"], found["selected"], total_days=found["total_days"])

    # ---- exports ------------------------------------------------------
    def export_employee(self, workspace_id: str, employee_id: str) -> ExportFile:
        salary = self.get_employee(workspace_id, employee_id)
        sheet = self.get_sheet(workspace_id)
        content = export.employee_workbook(self._reports.employee_row(salary))
        return ExportFile(filename=export.export_filename(salary.employee.name, sheet.period), content=content)

    def export_all(self, workspace_id: str) -> ExportFile:
        sheet = self.get_sheet(workspace_id)
        content = export.all_employees_workbook(self.report(workspace_id))
        return ExportFile(filename=export.export_filename("All_Employees", sheet.period), content=content)

    # ---- helpers ------------------------------------------------------
    def _require_workspace(self, workspace_id: str) -> SalaryWorkspace:
        ws = self._workspaces.get(workspace_id)
        if ws is None:
            raise NotFoundError("No attendance sheet uploaded yet")
        return ws

    @staticmethod
    def _require_sheet(ws: SalaryWorkspace) -> SalarySheet:
        if ws.sheet is None:
            raise NotFoundError("No attendance sheet uploaded yet")
        return ws.sheet
