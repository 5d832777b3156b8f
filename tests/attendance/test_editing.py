from datetime import date

import pytest

from src.store_attendance.store_attendance.attendance.editing import apply_edit, reconcile_record
from src.store_attendance.store_attendance.attendance.metrics import TimeMetrics
from src.store_attendance.store_attendance.attendance.model import (
    AttendanceDayRecord,
    Leave,
    Present,
    Timesheet,
    Unset,
    blank_record,
)
from src.store_attendance.store_attendance.core.enums import AttendanceStatus
from src.store_attendance.store_attendance.core.exceptions import ValidationError
from src.store_attendance.store_attendance.shifts.model import DEFAULT_SHIFT_REGISTRY as SHIFTS


def _filled(day=date(2024, 5, 1)) -> AttendanceDayRecord:
    record = blank_record(day)
    record = apply_edit(record, "attendanceStatus", "hadir", SHIFTS)
    record = apply_edit(record, "shift", "pagi", SHIFTS)
    record = apply_edit(record, "checkIn", "07:10", SHIFTS)
    return apply_edit(record, "checkOut", "15:05", SHIFTS)


def test_blank_record_defaults():
    record = blank_record(date(2024, 5, 1))

    assert record.day == "Rabu"
    assert record.state == Unset()
    assert record.attendance_status == AttendanceStatus.UNSET
    assert (record.check_in, record.check_out, record.shift) == ("", "", "")
    assert record.is_blank


def test_time_edits_recompute_all_metrics():
    record = _filled()

    assert record.metrics == TimeMetrics(lateness_minutes=10, early_arrival_minutes=0, overtime_minutes=5)

    record = apply_edit(record, "checkIn", "06:50", SHIFTS)
    assert record.metrics == TimeMetrics(lateness_minutes=0, early_arrival_minutes=10, overtime_minutes=5)


def test_clearing_an_input_resets_its_metric():
    record = apply_edit(_filled(), "checkOut", "", SHIFTS)
    assert record.overtime_minutes == 0
    assert record.lateness_minutes == 10

    record = apply_edit(record, "checkIn", "", SHIFTS)
    assert (record.lateness_minutes, record.early_arrival_minutes) == (0, 0)


def test_changing_shift_recomputes():
    record = apply_edit(_filled(), "shift", "siang", SHIFTS)

    # 07:10 is 470 minutes before the 15:00 start.
    assert record.early_arrival_minutes == 470
    assert record.lateness_minutes == 0


@pytest.mark.parametrize("status", ["cuti", "alpha"])
def test_leave_or_absent_clears_time_fields(status):
    record = apply_edit(_filled(), "attendanceStatus", status, SHIFTS)

    assert record.attendance_status.value == status
    assert record.timesheet is None
    assert (record.check_in, record.check_out, record.shift) == ("", "", "")
    assert (record.lateness_minutes, record.overtime_minutes, record.early_arrival_minutes) == (0, 0, 0)


def test_leave_day_is_inert_until_status_changes():
    record = apply_edit(_filled(), "attendanceStatus", "cuti", SHIFTS)

    with pytest.raises(ValidationError):
        apply_edit(record, "checkIn", "07:00", SHIFTS)

    record = apply_edit(record, "attendanceStatus", "hadir", SHIFTS)
    assert record.state == Present(Timesheet())
    record = apply_edit(record, "checkIn", "07:00", SHIFTS)
    assert record.check_in == "07:00"


def test_status_present_keeps_existing_timesheet():
    record = apply_edit(blank_record(date(2024, 5, 2)), "shift", "pagi", SHIFTS)
    record = apply_edit(record, "checkIn", "07:20", SHIFTS)

    record = apply_edit(record, "attendanceStatus", "hadir", SHIFTS)

    assert record.attendance_status == AttendanceStatus.PRESENT
    assert record.lateness_minutes == 20


def test_notes_edit_keeps_metrics():
    record = apply_edit(_filled(), "notes", "Ganti shift dengan Andi", SHIFTS)

    assert record.notes == "Ganti shift dengan Andi"
    assert record.lateness_minutes == 10


def test_notes_allowed_on_leave_day():
    record = apply_edit(blank_record(date(2024, 5, 3)), "attendanceStatus", "cuti", SHIFTS)
    record = apply_edit(record, "notes", "Cuti tahunan", SHIFTS)

    assert record.state == Leave()
    assert record.notes == "Cuti tahunan"


@pytest.mark.parametrize(
    "field, value",
    [
        ("checkIn", "7:5"),
        ("checkOut", "25:00"),
        ("attendanceStatus", "libur"),
        ("latenessMinutes", 0),
        ("overtimeMinutes", 30),
    ],
)
def test_invalid_edits_are_rejected(field, value):
    with pytest.raises(ValidationError):
        apply_edit(_filled(), field, value, SHIFTS)


def test_snake_case_field_aliases():
    record = apply_edit(blank_record(date(2024, 5, 1)), "shift", "pagi", SHIFTS)
    record = apply_edit(record, "check_in", "07:05", SHIFTS)

    assert record.lateness_minutes == 5


def test_auto_detect_fills_empty_shift_only():
    record = apply_edit(blank_record(date(2024, 5, 1)), "checkIn", "14:45", SHIFTS, auto_detect_shift=True)
    assert record.shift == "siang"
    assert record.early_arrival_minutes == 15

    record = apply_edit(blank_record(date(2024, 5, 1)), "checkIn", "14:45", SHIFTS)
    assert record.shift == ""
    assert record.metrics == TimeMetrics()

    chosen = apply_edit(blank_record(date(2024, 5, 1)), "shift", "pagi", SHIFTS)
    chosen = apply_edit(chosen, "checkIn", "14:45", SHIFTS, auto_detect_shift=True)
    assert chosen.shift == "pagi"
    assert chosen.lateness_minutes == 465


def test_reconcile_replaces_stale_metrics():
    stale = AttendanceDayRecord(
        date=date(2024, 5, 1),
        day="Rabu",
        state=Present(Timesheet(check_in="07:10", check_out="15:05", shift="pagi", metrics=TimeMetrics(99, 99, 99))),
    )

    record = reconcile_record(stale, SHIFTS)

    assert record.metrics == TimeMetrics(lateness_minutes=10, early_arrival_minutes=0, overtime_minutes=5)
    assert reconcile_record(record, SHIFTS) == record
