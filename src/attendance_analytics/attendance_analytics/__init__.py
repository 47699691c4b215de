"""Attendance Analytics package.

This package is organized by feature modules (attendance, cohorts, holidays,
analytics) with a thin Flask controller layer and read-only repositories
feeding stateless calculation services.
"""
