from __future__ import annotations

import csv
import io
import re
from typing import Sequence

from ..core.exceptions import ValidationError
from .model import AttendanceDayRecord

EXPORT_FIELDS = [
    "date",
    "day",
    "check_in",
    "check_out",
    "shift",
    "status",
    "lateness_minutes",
    "early_arrival_minutes",
    "overtime_minutes",
    "notes",
]


def export_csv(records: Sequence[AttendanceDayRecord]) -> str:
    """Flat CSV table of one reconciled month."""

    if not records:
        raise ValidationError("Tidak ada data untuk diekspor")

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS, lineterminator="\n")
    writer.writeheader()
    for r in records:
        writer.writerow(
            {
                "date": r.date.isoformat(),
                "day": r.day,
                "check_in": r.check_in,
                "check_out": r.check_out,
                "shift": r.shift,
                "status": r.attendance_status.value,
                "lateness_minutes": r.lateness_minutes,
                "early_arrival_minutes": r.early_arrival_minutes,
                "overtime_minutes": r.overtime_minutes,
                "notes": r.notes,
            }
        )
    return out.getvalue()


def export_filename(employee_name: str, year: int, month: int) -> str:
    safe_name = re.sub(r"[^\w.-]+", "_", employee_name.strip()) or "karyawan"
    return f"absensi_{safe_name}_{year:04d}_{month:02d}.csv"
