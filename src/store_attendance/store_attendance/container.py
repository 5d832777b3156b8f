from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLMonthlyAttendanceRepository
from .attendance.repository import MonthlyAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_FETCH_RETRIES
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: MonthlyAttendanceRepository

    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    fetch_retries: int = DEFAULT_FETCH_RETRIES,
    auto_detect_shift: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLMonthlyAttendanceRepository(conn)
    attendance_service = AttendanceService(
        attendance_repo,
        fetch_retries=fetch_retries,
        auto_detect_shift=auto_detect_shift,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
    )
