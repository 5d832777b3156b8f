from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, month_bounds
from ..users.model import Employee, Store
from .model import AttendanceDayRecord, EmployeeMonth, MonthKey
from .repository import MonthlyAttendanceRepository
from .serializers import record_from_payload


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class MySQLMonthlyAttendanceRepository(MonthlyAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_month(self, key: MonthKey) -> EmployeeMonth:
        start, end = month_bounds(key.year, key.month)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name FROM users WHERE user_id=%s", (key.employee_id,))
            user = fetchone(cur)
            if not user:
                raise NotFoundError("Karyawan tidak ditemukan")

            cur.execute(
                """
                SELECT s.store_id, s.name, s.shifts,
                       s.entry_time_start, s.entry_time_end, s.exit_time_start, s.exit_time_end
                FROM user_stores us
                JOIN stores s ON s.store_id = us.store_id
                WHERE us.user_id=%s
                ORDER BY s.store_id
                """,
                (key.employee_id,),
            )
            stores = tuple(
                Store(
                    store_id=int(r["store_id"]),
                    name=r["name"],
                    shifts=r.get("shifts"),
                    entry_time_start=r.get("entry_time_start"),
                    entry_time_end=r.get("entry_time_end"),
                    exit_time_start=r.get("exit_time_start"),
                    exit_time_end=r.get("exit_time_end"),
                )
                for r in fetchall(cur)
            )

            cur.execute(
                """
                SELECT attendance_id, date, check_in, check_out, shift,
                       lateness_minutes, overtime_minutes, early_arrival_minutes,
                       attendance_status, notes
                FROM attendance
                WHERE user_id=%s AND date >= %s AND date < %s
                ORDER BY date
                """,
                (key.employee_id, start, end),
            )
            records = tuple(
                record_from_payload(
                    {
                        "id": r["attendance_id"],
                        "date": _as_date(r["date"]).isoformat(),
                        "checkIn": r.get("check_in"),
                        "checkOut": r.get("check_out"),
                        "shift": r.get("shift"),
                        "latenessMinutes": r.get("lateness_minutes"),
                        "overtimeMinutes": r.get("overtime_minutes"),
                        "earlyArrivalMinutes": r.get("early_arrival_minutes"),
                        "attendanceStatus": r.get("attendance_status"),
                        "notes": r.get("notes"),
                    }
                )
                for r in fetchall(cur)
            )

        employee = Employee(employee_id=str(user["user_id"]), name=user["name"], stores=stores)
        return EmployeeMonth(employee=employee, records=records)

    def save_month(
        self,
        key: MonthKey,
        *,
        store_id: Optional[int],
        records: Sequence[AttendanceDayRecord],
    ) -> None:
        if store_id is None:
            raise ValidationError("Karyawan belum ditugaskan ke toko mana pun")

        start, end = month_bounds(key.year, key.month)
        rows = [
            (
                r.record_id or str(uuid.uuid4()),
                key.employee_id,
                int(store_id),
                datetime.combine(r.date, datetime.min.time()),
                r.check_in or None,
                r.check_out or None,
                r.shift or None,
                r.lateness_minutes,
                r.overtime_minutes,
                r.early_arrival_minutes,
                r.attendance_status.value,
                r.notes or None,
            )
            for r in records
            if not r.is_blank
        ]

        # One transaction: the month is replaced as a whole (last write wins).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE user_id=%s AND date >= %s AND date < %s",
                (key.employee_id, start, end),
            )
            if rows:
                cur.executemany(
                    """
                    INSERT INTO attendance(
                        attendance_id, user_id, store_id, date, check_in, check_out, shift,
                        lateness_minutes, overtime_minutes, early_arrival_minutes,
                        attendance_status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    rows,
                )
