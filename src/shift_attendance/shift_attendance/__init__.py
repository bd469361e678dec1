"""Shift Attendance package.

Organized by feature modules (shifts, attendance, payroll, reconciliation,
notifications, ...) with a thin Flask controller layer over service and
repository layers.
"""
