from __future__ import annotations

from dataclasses import replace

from ..common.validators import require_clock_or_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..shifts.detector import detect_shift
from ..shifts.model import ShiftRegistry
from .model import AttendanceDayRecord, Timesheet, state_for_status

CHECK_IN = "checkIn"
CHECK_OUT = "checkOut"
SHIFT = "shift"
STATUS = "attendanceStatus"
NOTES = "notes"

EDITABLE_FIELDS = (STATUS, SHIFT, CHECK_IN, CHECK_OUT, NOTES)

_FIELD_ALIASES = {
    "check_in": CHECK_IN,
    "check_out": CHECK_OUT,
    "status": STATUS,
    "attendance_status": STATUS,
}

_TIMESHEET_ATTRS = {CHECK_IN: "check_in", CHECK_OUT: "check_out", SHIFT: "shift"}
_LABELS = {CHECK_IN: "Jam masuk", CHECK_OUT: "Jam keluar"}


def _with_default_shift(timesheet: Timesheet, registry: ShiftRegistry) -> Timesheet:
    if timesheet.check_in and not timesheet.shift:
        return replace(timesheet, shift=detect_shift(timesheet.check_in, registry))
    return timesheet


def apply_edit(
    record: AttendanceDayRecord,
    field: str,
    value,
    registry: ShiftRegistry,
    *,
    auto_detect_shift: bool = False,
) -> AttendanceDayRecord:
    """Return a copy of `record` with one field changed and metrics re-derived.

    - attendanceStatus cuti/alpha drops the timesheet entirely; hadir and
      belum_diatur keep whatever timesheet the day already had.
    - checkIn/checkOut/shift recompute all three metrics; a cleared input
      zeroes the metrics it drives.
    - The minute fields themselves are not editable.
    """

    field = _FIELD_ALIASES.get(field, field)

    if field == STATUS:
        try:
            status = AttendanceStatus(value)
        except ValueError:
            raise ValidationError(f"Status absensi tidak dikenal: {value}")
        return replace(record, state=state_for_status(status, record.timesheet))

    if field == NOTES:
        return replace(record, notes="" if value is None else str(value))

    if field in _TIMESHEET_ATTRS:
        timesheet = record.timesheet
        if timesheet is None:
            raise ValidationError(
                f"{record.date.isoformat()}: status {record.attendance_status.value} tidak memiliki jam/shift"
            )

        if field == SHIFT:
            value = str(value or "").strip()
        else:
            value = require_clock_or_empty(value, _LABELS[field])

        timesheet = replace(timesheet, **{_TIMESHEET_ATTRS[field]: value})
        if field == CHECK_IN and auto_detect_shift:
            timesheet = _with_default_shift(timesheet, registry)
        return record.with_timesheet(timesheet.recomputed(registry))

    raise ValidationError(f"Kolom {field} tidak dapat diubah (pilihan: {', '.join(EDITABLE_FIELDS)})")


def reconcile_record(
    record: AttendanceDayRecord,
    registry: ShiftRegistry,
    *,
    auto_detect_shift: bool = False,
) -> AttendanceDayRecord:
    """Bring stored/submitted metrics in line with the record's own inputs."""
    timesheet = record.timesheet
    if timesheet is None:
        return record
    if auto_detect_shift:
        timesheet = _with_default_shift(timesheet, registry)
    return record.with_timesheet(timesheet.recomputed(registry))
