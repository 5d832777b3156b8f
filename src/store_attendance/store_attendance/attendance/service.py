from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..common.validators import require_clock_or_empty, require_month, require_non_empty
from ..core.constants import DEFAULT_FETCH_RETRIES
from ..core.exceptions import ValidationError
from ..shifts.detector import detect_shift
from ..shifts.model import DEFAULT_SHIFT_REGISTRY
from ..shifts.registry import resolve_shifts
from .export import export_csv, export_filename
from .model import MonthKey
from .repository import MonthlyAttendanceRepository
from .serializers import records_from_payload
from .workflow import MonthlyReconciliation


class AttendanceService:
    def __init__(
        self,
        attendance: MonthlyAttendanceRepository,
        *,
        fetch_retries: int = DEFAULT_FETCH_RETRIES,
        auto_detect_shift: bool = True,
    ):
        self._attendance = attendance
        self._fetch_retries = int(fetch_retries)
        self._auto_detect_shift = bool(auto_detect_shift)

    def open_month(
        self,
        employee_id: str,
        year: int,
        month: int,
        *,
        store_id: Optional[int] = None,
    ) -> MonthlyReconciliation:
        employee_id = require_non_empty(str(employee_id or ""), "ID karyawan")
        year, month = require_month(year, month)

        workflow = MonthlyReconciliation(
            self._attendance,
            MonthKey(employee_id=employee_id, year=year, month=month),
            store_id=store_id,
            fetch_retries=self._fetch_retries,
            auto_detect_shift=self._auto_detect_shift,
        )
        workflow.load()
        return workflow

    def get_month_payload(self, employee_id: str, year: int, month: int, *, store_id: Optional[int] = None) -> dict:
        return self.open_month(employee_id, year, month, store_id=store_id).to_payload()

    def replace_month(
        self,
        employee_id: str,
        year: int,
        month: int,
        rows: Iterable[Mapping],
        *,
        store_id: Optional[int] = None,
    ) -> dict:
        """Bulk save: submitted rows replace the month, metrics are re-derived server side."""

        records = records_from_payload(rows)
        workflow = self.open_month(employee_id, year, month, store_id=store_id)
        workflow.replace_records(records)
        workflow.save()
        return workflow.to_payload()

    def export_month(
        self,
        employee_id: str,
        year: int,
        month: int,
        *,
        store_id: Optional[int] = None,
    ) -> tuple[str, str]:
        workflow = self.open_month(employee_id, year, month, store_id=store_id)
        filename = export_filename(workflow.employee.name, workflow.key.year, workflow.key.month)
        return filename, export_csv(workflow.records)

    def detect_shift(self, check_in: str, *, store_shifts: Optional[str] = None) -> str:
        check_in = require_clock_or_empty(check_in, "Jam masuk")
        if not check_in:
            raise ValidationError("Jam masuk wajib diisi")
        registry = resolve_shifts(store_shifts) if store_shifts else DEFAULT_SHIFT_REGISTRY
        return detect_shift(check_in, registry)
