"""QR Attendance package.

Organized by feature modules (tokens, attendance, employees, ...) with a thin
Flask controller layer on top of service/repository layers.
"""
