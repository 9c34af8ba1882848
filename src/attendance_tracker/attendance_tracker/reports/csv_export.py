from __future__ import annotations

import csv
import io

from ..core.constants import CSV_HEADER
from .model import CourseReport


def course_report_csv(report: CourseReport) -> str:
    """Flatten a course report into ``Student Name,Roll Number,Session Date,Status`` rows."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in report.rows():
        writer.writerow(row)
    return out.getvalue()


def csv_filename(report: CourseReport) -> str:
    code = "".join(ch for ch in report.course.code if ch.isalnum() or ch in "-_") or "course"
    return f"attendance_{code}_group{report.matrix.group_id}.csv"
