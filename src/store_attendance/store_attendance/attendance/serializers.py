"""camelCase JSON rows <-> AttendanceDayRecord."""

from __future__ import annotations

from typing import Iterable, Mapping

from ..common.datetime_utils import parse_iso_date, weekday_label
from ..common.validators import require_clock_or_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .metrics import TimeMetrics
from .model import AttendanceDayRecord, Timesheet, state_for_status


def _as_minutes(value) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def parse_status(value) -> AttendanceStatus:
    """Unknown or missing status values fall back to belum_diatur."""
    try:
        return AttendanceStatus(value or AttendanceStatus.UNSET.value)
    except ValueError:
        return AttendanceStatus.UNSET


def record_from_payload(row: Mapping) -> AttendanceDayRecord:
    raw_date = row.get("date")
    if not raw_date or not isinstance(raw_date, str):
        raise ValidationError("Tanggal absensi wajib diisi")
    try:
        day_date = parse_iso_date(raw_date)
    except ValueError:
        raise ValidationError(f"Tanggal absensi tidak valid: {raw_date}")

    status = parse_status(row.get("attendanceStatus"))
    timesheet = None
    if not status.is_inert:
        timesheet = Timesheet(
            check_in=require_clock_or_empty(row.get("checkIn"), "Jam masuk"),
            check_out=require_clock_or_empty(row.get("checkOut"), "Jam keluar"),
            shift=str(row.get("shift") or "").strip(),
            metrics=TimeMetrics(
                lateness_minutes=_as_minutes(row.get("latenessMinutes")),
                early_arrival_minutes=_as_minutes(row.get("earlyArrivalMinutes")),
                overtime_minutes=_as_minutes(row.get("overtimeMinutes")),
            ),
        )

    record_id = row.get("id")
    return AttendanceDayRecord(
        date=day_date,
        day=str(row.get("day") or weekday_label(day_date)),
        state=state_for_status(status, timesheet),
        notes=str(row.get("notes") or ""),
        record_id=str(record_id) if record_id else None,
    )


def record_to_payload(record: AttendanceDayRecord) -> dict:
    payload = {
        "date": record.date.isoformat(),
        "day": record.day,
        "checkIn": record.check_in,
        "checkOut": record.check_out,
        "shift": record.shift,
        "latenessMinutes": record.lateness_minutes,
        "overtimeMinutes": record.overtime_minutes,
        "earlyArrivalMinutes": record.early_arrival_minutes,
        "attendanceStatus": record.attendance_status.value,
        "notes": record.notes,
    }
    if record.record_id:
        payload["id"] = record.record_id
    return payload


def records_from_payload(rows: Iterable[Mapping]) -> list[AttendanceDayRecord]:
    if rows is None or isinstance(rows, (str, bytes, Mapping)):
        raise ValidationError("attendanceData harus berupa daftar")
    out = []
    for row in rows:
        if not isinstance(row, Mapping):
            raise ValidationError("Setiap baris attendanceData harus berupa objek")
        out.append(record_from_payload(row))
    return out
