"""Attendance Tracker package.

Organized by feature modules (users, academics, sessions, attendance, ...)
around three read/derive layers: ``scope`` decides what a principal may touch,
``stats`` derives attendance figures from raw records, ``reports`` shapes them
for JSON/CSV output. Flask controllers are a thin transport on top.
"""
