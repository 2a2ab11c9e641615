"""College Attendance package.

Organized by feature modules (academics, sessions, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
