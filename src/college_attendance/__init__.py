"""College Attendance package.

This package is organized by feature modules (identity, profiles, attendance,
timetable, advisors, reports) with a thin Flask controller layer and
service/repository layers underneath.
"""
