"""Example: run a workbook through the service layer (no Flask).

Usage: python examples/example_usage.py Attendance_Jan_2025.xlsx
"""

import importlib
import sys

from config import get_settings_module

from src.salary_calculator.salary_calculator.container import build_container
from src.salary_calculator.salary_calculator.core.policy import OfficePolicy


def main(path: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(policy=OfficePolicy.from_settings(settings))
    service = container.workspace_service

    with open(path, "rb") as fh:
        service.upload("cli", path, fh)

    for salary in service.list_employees("cli"):
        calc = salary.calculation
        print(f"{salary.employee.name:<24} deficit={calc.total_deficit_minutes:>5}m  final={calc.final_salary}")


if __name__ == "__main__":
    main(sys.argv[1])
