"""Spreadsheet exports of salary reports.

Writers only consume the report rows built by ``PayrollReportService``.
"""
from __future__ import annotations

import io
import re
from datetime import date
from typing import Optional

import pandas as pd

from ..attendance.ingestor import Period
from ..common.datetime_utils import today_local
from .service import ReportData

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DETAIL_COLUMNS = {
    "date": "Day",
    "status": "Status",
    "in_time": "In Time",
    "out_time": "Out Time",
    "late_by": "Late (mins)",
    "early_by": "Early (mins)",
    "deficit_minutes": "Total Deficit",
    "buffer_applied": "Buffer",
}

_SHEET_NAME_BAD = re.compile(r"[\[\]:*?/\\]")


def summary_lines(row: dict) -> list[list]:
    calc = row["calculation"]
    return [
        ["Employee ID", row["id"]],
        ["Employee Name", row["name"]],
        ["Department", row["department"]],
        ["Base Salary", row["salary"]],
        [None, None],
        ["ATTENDANCE SUMMARY", None],
        ["Total Days", calc["total_days"]],
        ["Working Days", calc["working_days"]],
        ["Present Days", calc["present_days"]],
        ["WFH Days", calc["wfh_days"]],
        ["Week Off Days", calc["week_off_days"]],
        ["Absent Days", calc["absent_days"]],
        ["CL Days", calc["cl_days"]],
        ["Holiday Days", calc["holiday_days"]],
        [None, None],
        ["SALARY CALCULATION", None],
        ["Per Day Salary", round(calc["per_day_salary"], 2)],
        ["Per Minute Rate", calc["per_minute_rate"]],
        ["Total Deficit Minutes", calc["total_deficit_minutes"]],
        ["Buffer Applied (mins)", calc["buffer_applied"]],
        ["Buffer Days", ", ".join(f"Day {d}" for d in calc["days_with_buffer"]) or "-"],
        ["Final Deficit (mins)", calc["final_deficit"]],
        ["Deduction", calc["deduction"]],
        ["Final Salary", calc["final_salary"]],
    ]


def details_frame(row: dict) -> pd.DataFrame:
    df = pd.DataFrame(row.get("days", []), columns=list(DETAIL_COLUMNS))
    df["in_time"] = df["in_time"].fillna("-")
    df["out_time"] = df["out_time"].fillna("-")
    df["buffer_applied"] = df["buffer_applied"].map({True: "Yes", False: "No"})
    return df.rename(columns=DETAIL_COLUMNS)


def _write_employee(writer: pd.ExcelWriter, row: dict, *, summary_sheet: str, details_sheet: Optional[str]) -> None:
    summary = pd.DataFrame(summary_lines(row))
    summary.to_excel(writer, sheet_name=summary_sheet, index=False, header=False)
    details = details_frame(row)
    if details_sheet:
        details.to_excel(writer, sheet_name=details_sheet, index=False)
    else:
        details.to_excel(writer, sheet_name=summary_sheet, index=False, startrow=len(summary) + 2)


def employee_workbook(row: dict) -> bytes:
    """Workbook with a "Summary" sheet and an "Attendance Details" sheet."""
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        _write_employee(writer, row, summary_sheet="Summary", details_sheet="Attendance Details")
    return output.getvalue()


def all_employees_workbook(report: ReportData) -> bytes:
    """One "All Employees" overview sheet plus a summary/detail sheet per employee."""
    overview = pd.DataFrame(
        [
            {
                "Employee ID": r["id"],
                "Name": r["name"],
                "Department": r["department"],
                "Base Salary": r["salary"],
                "Total Deficit (mins)": r["calculation"]["total_deficit_minutes"],
                "Buffer Applied (mins)": r["calculation"]["buffer_applied"],
                "Final Deficit (mins)": r["calculation"]["final_deficit"],
                "Deduction": r["calculation"]["deduction"],
                "Final Salary": r["calculation"]["final_salary"],
            }
            for r in report.rows
        ]
    )
    total = pd.DataFrame([{"Deduction": "GRAND TOTAL", "Final Salary": report.summary["grand_total"]}])
    overview = pd.concat([overview, total], ignore_index=True)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        overview.to_excel(writer, sheet_name="All Employees", index=False)
        used = {"All Employees"}
        for r in report.rows:
            name = sheet_name(f"{r['name']}_{r['id']}", used)
            used.add(name)
            _write_employee(writer, r, summary_sheet=name, details_sheet=None)
    return output.getvalue()


def sheet_name(raw: str, used: set[str]) -> str:
    """Excel sheet names: at most 31 chars, no []:*?/\\, unique per workbook."""
    base = _SHEET_NAME_BAD.sub("_", raw).strip() or "Employee"
    name = base[:31]
    n = 2
    while name in used:
        suffix = f" ({n})"
        name = base[: 31 - len(suffix)] + suffix
        n += 1
    return name


def export_filename(prefix: str, period: Period, *, today: Optional[date] = None) -> str:
    today = today or today_local()
    period_text = f"{period.label}_" if period.label else ""
    safe = re.sub(r"[\\/]+", "_", prefix).strip() or "Employee"
    return f"{safe}_Salary_{period_text}{today.isoformat()}.xlsx"
