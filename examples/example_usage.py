"""Contoh: memakai service layer tanpa Flask.

Membuka satu bulan absensi, mengoreksi satu hari, lalu menampilkan ringkasan.
"""

import importlib
import sys

from config import get_settings_module

from src.store_attendance.store_attendance.container import build_container


def main(employee_id: str, year: int, month: int):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    workflow = container.attendance_service.open_month(employee_id, year, month)
    first = workflow.records[0]
    workflow.edit(first.date, "checkIn", "07:10")
    workflow.edit(first.date, "checkOut", "15:05")
    print(workflow.record_for(first.date))
    print(workflow.summary())
    # Nothing is written unless save() is called.


if __name__ == "__main__":
    main(sys.argv[1], int(sys.argv[2]), int(sys.argv[3]))
