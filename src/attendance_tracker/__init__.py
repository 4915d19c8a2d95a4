"""Attendance Tracker package.

Organized by feature modules (employees, attendance, settings, reports,
backup, ...) with a thin Flask controller layer over service/repository layers.
"""
