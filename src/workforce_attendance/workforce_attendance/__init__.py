"""Workforce Attendance package.

This package is organized by feature modules (punches, attendance, summaries, ...)
with a thin Flask controller layer and service/repository layers underneath.
The attendance module turns raw clock punches into one reconciled daily summary
per employee and day.
"""
