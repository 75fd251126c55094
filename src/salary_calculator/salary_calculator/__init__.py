"""Attendance salary calculator package.

This package is organized by feature modules (attendance, payroll, workspace, ...)
with a thin Flask controller layer over plain service/repository layers.
"""
