import io
from datetime import time

import pandas as pd

from src.salary_calculator.salary_calculator.attendance.ingestor import (
    SheetIngestor,
    detect_days_in_month,
    parse_period,
    parse_salary,
    read_workbook,
)
from src.salary_calculator.salary_calculator.core.enums import DayStatus


def _in_row(seq, name, dept, salary, days):
    row = {"S. No. ": seq, "Employee Name": name, "Department": dept, "Salary": salary, "In/Out Time": "In Time"}
    row.update({str(d): v for d, v in days.items()})
    return row


def _out_row(days):
    row = {"S. No. ": None, "Employee Name": None, "Department": None, "Salary": None, "In/Out Time": "Out Time"}
    row.update({str(d): v for d, v in days.items()})
    return row


def test_detect_days_in_month():
    assert detect_days_in_month(["S. No.", "Employee Name", "1", "2", "30"]) == 30
    assert detect_days_in_month([1, 2, 28]) == 28
    assert detect_days_in_month(["Employee Name", "0", "32", "Salary"]) == 31
    assert detect_days_in_month([]) == 31


def test_parse_salary_defaults_to_zero():
    assert parse_salary(31000) == 31000
    assert parse_salary("31,000") == 31000
    assert parse_salary(" 25000.5 ") == 25000.5
    assert parse_salary("n/a") == 0
    assert parse_salary(None) == 0
    assert parse_salary(float("nan")) == 0
    assert parse_salary(-100) == 0


def test_parse_period_from_filename():
    p = parse_period("Attendance_Jan_2025.xlsx")
    assert (p.month, p.year) == ("Jan", "2025")
    assert p.label == "Jan_2025"
    assert parse_period("attendance.xlsx").label == ""
    assert parse_period("Attendance_Feb.xlsx").month == "Feb"
    assert parse_period("Attendance_Feb.xlsx").year != ""


def test_pairs_in_and_out_rows():
    rows = [
        _in_row(1, "Asha", "Sales", 31000, {1: "09:45", 2: "Week off", 3: "WFH"}),
        _out_row({1: "06:15", 2: None, 3: None}),
        _in_row(2, "Ravi", "Ops", "bad", {1: "10:05", 2: "10:00", 3: None}),
        _out_row({1: "18:30", 2: "18:45", 3: None}),
    ]

    employees = SheetIngestor().ingest(rows)

    assert [e.name for e in employees] == ["Asha", "Ravi"]
    asha, ravi = employees
    assert asha.employee_id == 1
    assert asha.salary == 31000
    assert sorted(asha.attendance) == [1, 2, 3]
    assert asha.attendance[1].in_time == "09:45"
    assert asha.attendance[1].out_time == "18:15"
    assert asha.attendance[2].status == DayStatus.WEEK_OFF
    assert asha.attendance[3].status == DayStatus.WFH
    assert asha.attendance[3].out_time is None

    assert ravi.salary == 0
    assert ravi.attendance[2].out_time == "18:45"
    assert ravi.attendance[3].in_time is None


def test_missing_out_row_leaves_out_times_empty():
    rows = [
        _in_row(1, "Asha", "Sales", 1000, {1: "09:45"}),
        _in_row(2, "Ravi", "Ops", 1000, {1: "10:00"}),
        _out_row({1: "18:30"}),
    ]

    asha, ravi = SheetIngestor().ingest(rows)

    assert asha.attendance[1].out_time is None
    assert ravi.attendance[1].out_time == "18:30"


def test_rows_without_name_or_sequence_are_skipped():
    rows = [
        {"S. No. ": None, "Employee Name": "Header note", "1": "x"},
        {"S. No. ": 5, "Employee Name": "", "1": "09:00"},
        _in_row(7, "Meera", "HR", 20000, {1: "09:50"}),
    ]

    employees = SheetIngestor().ingest(rows)

    assert [e.employee_id for e in employees] == [7]


def test_day_columns_beyond_detected_count_are_ignored():
    rows = [_in_row(1, "Asha", "Sales", 1000, {1: "09:45", 2: "09:50"})]

    (asha,) = SheetIngestor().ingest(rows, days_in_month=1)

    assert list(asha.attendance) == [1]


def test_read_workbook_first_sheet():
    frame = pd.DataFrame(
        [
            {"S. No. ": 1, "Employee Name": "Asha", "Department": "Sales", "Salary": 31000, "In/Out Time": "In Time", 1: time(9, 45), 2: "Week off"},
            {"S. No. ": None, "Employee Name": None, "Department": None, "Salary": None, "In/Out Time": "Out Time", 1: time(6, 15), 2: None},
        ]
    )
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name="March")
        pd.DataFrame([{"ignored": 1}]).to_excel(writer, index=False, sheet_name="Other")
    buf.seek(0)

    rows = read_workbook(buf)
    (asha,) = SheetIngestor().ingest(rows)

    assert detect_days_in_month(rows[0].keys()) == 2
    assert asha.attendance[1].in_time == "09:45"
    assert asha.attendance[1].out_time == "18:15"
    assert asha.attendance[2].status == DayStatus.WEEK_OFF
