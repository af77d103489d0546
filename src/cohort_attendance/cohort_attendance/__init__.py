"""Cohort Attendance package.

Pure attendance analytics organized by feature modules (workdays, stats, bulk,
completion, export) with a thin service layer on top of Protocol repositories.
"""
