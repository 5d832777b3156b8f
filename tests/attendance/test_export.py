from datetime import date

import pytest

from src.store_attendance.store_attendance.attendance.editing import apply_edit
from src.store_attendance.store_attendance.attendance.export import export_csv, export_filename
from src.store_attendance.store_attendance.attendance.model import blank_record
from src.store_attendance.store_attendance.core.exceptions import ValidationError
from src.store_attendance.store_attendance.shifts.model import DEFAULT_SHIFT_REGISTRY as SHIFTS


def test_export_csv_rows():
    worked = blank_record(date(2024, 5, 1))
    for field, value in [("attendanceStatus", "hadir"), ("shift", "pagi"), ("checkIn", "07:10"), ("checkOut", "15:05")]:
        worked = apply_edit(worked, field, value, SHIFTS)
    worked = apply_edit(worked, "notes", "macet, hujan", SHIFTS)
    leave = apply_edit(blank_record(date(2024, 5, 2)), "attendanceStatus", "cuti", SHIFTS)

    lines = export_csv([worked, leave]).splitlines()

    assert lines[0] == (
        "date,day,check_in,check_out,shift,status,lateness_minutes,early_arrival_minutes,overtime_minutes,notes"
    )
    assert lines[1] == '2024-05-01,Rabu,07:10,15:05,pagi,hadir,10,0,5,"macet, hujan"'
    assert lines[2] == "2024-05-02,Kamis,,,,cuti,0,0,0,"


def test_export_of_empty_month_is_rejected():
    with pytest.raises(ValidationError):
        export_csv([])


def test_export_filename():
    assert export_filename("Budi Santoso", 2024, 5) == "absensi_Budi_Santoso_2024_05.csv"
