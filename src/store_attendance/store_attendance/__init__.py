"""Store Attendance package.

This package is organized by feature modules (shifts, attendance) with a thin
Flask controller layer on top of service/repository layers. The shift and
time-metric modules are pure computation; the monthly reconciliation workflow
is the only stateful piece.
"""
