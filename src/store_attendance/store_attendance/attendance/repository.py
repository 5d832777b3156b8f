from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceDayRecord, EmployeeMonth, MonthKey


class MonthlyAttendanceRepository(Protocol):
    def fetch_month(self, key: MonthKey) -> EmployeeMonth:
        """Load the employee and the attendance rows stored for one month.

        Raises NotFoundError when the employee does not exist and
        AuthorizationError when the month may not be read. Rows may be
        sparse; missing days are filled in by the caller.
        """

        raise NotImplementedError

    def save_month(
        self,
        key: MonthKey,
        *,
        store_id: Optional[int],
        records: Sequence[AttendanceDayRecord],
    ) -> None:
        """Replace the month's rows in one write (no partial success)."""

        raise NotImplementedError
