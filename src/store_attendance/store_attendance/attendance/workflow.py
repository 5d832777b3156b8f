from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from ..common.datetime_utils import days_in_month, iter_month_days, shift_month
from ..common.validators import require_month
from ..core.constants import DEFAULT_FETCH_RETRIES
from ..core.enums import AttendanceStatus, WorkflowState
from ..core.exceptions import (
    AuthorizationError,
    FetchError,
    NotFoundError,
    SaveError,
    SaveInProgressError,
    ValidationError,
)
from ..shifts.model import DEFAULT_SHIFT_REGISTRY, ShiftRegistry
from ..shifts.registry import registry_for_store
from ..users.model import Employee, Store
from .editing import apply_edit, reconcile_record
from .model import AttendanceDayRecord, EmployeeMonth, MonthKey, MonthlySummary, blank_record
from .repository import MonthlyAttendanceRepository
from .serializers import record_to_payload

logger = logging.getLogger(__name__)

# Permission and data-absence failures are final; retrying cannot help.
_TERMINAL_FETCH_ERRORS = (NotFoundError, AuthorizationError, ValidationError)


class MonthlyReconciliation:
    """One employee-month of attendance being reviewed and corrected.

    State machine: LOADED -> (edit) -> EDITING -> (save) -> SAVING -> LOADED.
    A failed save goes back to EDITING with the edits intact. `discard()` and
    `switch_month()` reload from the repository; neither saves implicitly.

    Fetch and save results are checked against the current month key when
    they complete; a result for a month the session already left is dropped.
    """

    def __init__(
        self,
        repository: MonthlyAttendanceRepository,
        key: MonthKey,
        *,
        store_id: Optional[int] = None,
        fetch_retries: int = DEFAULT_FETCH_RETRIES,
        auto_detect_shift: bool = True,
    ):
        year, month = require_month(key.year, key.month)
        self._repository = repository
        self._key = MonthKey(employee_id=str(key.employee_id), year=year, month=month)
        self._preferred_store_id = store_id
        self._fetch_retries = max(0, int(fetch_retries))
        self._auto_detect_shift = bool(auto_detect_shift)

        self._employee: Optional[Employee] = None
        self._store: Optional[Store] = None
        self._registry: ShiftRegistry = DEFAULT_SHIFT_REGISTRY
        self._records: list[AttendanceDayRecord] = []
        self._baseline: tuple[AttendanceDayRecord, ...] = ()
        self._has_changes = False
        self._save_pending = False
        self._state = WorkflowState.LOADED

    # -- read side --------------------------------------------------------

    @property
    def key(self) -> MonthKey:
        return self._key

    @property
    def employee(self) -> Optional[Employee]:
        return self._employee

    @property
    def store(self) -> Optional[Store]:
        return self._store

    @property
    def registry(self) -> ShiftRegistry:
        return self._registry

    @property
    def records(self) -> tuple[AttendanceDayRecord, ...]:
        return tuple(self._records)

    @property
    def has_changes(self) -> bool:
        return self._has_changes

    @property
    def save_pending(self) -> bool:
        return self._save_pending

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._employee is not None

    def record_for(self, target: Union[int, date]) -> AttendanceDayRecord:
        return self._records[self._index_of(target)]

    def changed_records(self) -> list[AttendanceDayRecord]:
        baseline = {r.date: r for r in self._baseline}
        return [r for r in self._records if baseline.get(r.date) != r]

    def summary(self) -> MonthlySummary:
        counts = {status: 0 for status in AttendanceStatus}
        for r in self._records:
            counts[r.attendance_status] += 1
        return MonthlySummary(
            present=counts[AttendanceStatus.PRESENT],
            leave=counts[AttendanceStatus.LEAVE],
            absent=counts[AttendanceStatus.ABSENT],
            unset=counts[AttendanceStatus.UNSET],
            total_lateness_minutes=sum(r.lateness_minutes for r in self._records),
            total_early_arrival_minutes=sum(r.early_arrival_minutes for r in self._records),
            total_overtime_minutes=sum(r.overtime_minutes for r in self._records),
        )

    def to_payload(self) -> dict:
        return {
            "employee": self._employee.to_payload() if self._employee else None,
            "attendanceData": [record_to_payload(r) for r in self._records],
            "selectedStoreId": self._store.store_id if self._store else None,
            "shiftOptions": self._registry.options(),
            "summary": self.summary().to_payload(),
        }

    # -- loading ----------------------------------------------------------

    def load(self) -> None:
        key = self._key
        month = self._fetch(key)
        if key != self._key:
            logger.info("Dropping stale attendance fetch for %s/%s", key.employee_id, key.label)
            return
        self._apply_loaded(month)
        logger.info("Loaded attendance %s/%s (%d days)", key.employee_id, key.label, len(self._records))

    def discard(self) -> None:
        """Throw away local edits by reloading the month from the repository."""
        self.load()

    def switch_month(self, year: int, month: int) -> None:
        """Abandon the current month (unsaved edits are lost) and load another one.

        If the fetch fails the session is left unloaded for the new month;
        edits and saves are refused until `load()` succeeds.
        """
        year, month = require_month(year, month)
        if self._has_changes:
            logger.info("Switching away from %s with unsaved changes", self._key.label)
        self._key = MonthKey(employee_id=self._key.employee_id, year=year, month=month)
        self._employee = None
        self._store = None
        self._records = []
        self._baseline = ()
        self._has_changes = False
        self._state = WorkflowState.LOADED
        self.load()

    def next_month(self) -> None:
        self.switch_month(*shift_month(self._key.year, self._key.month, 1))

    def previous_month(self) -> None:
        self.switch_month(*shift_month(self._key.year, self._key.month, -1))

    def _fetch(self, key: MonthKey) -> EmployeeMonth:
        attempt = 0
        while True:
            try:
                return self._repository.fetch_month(key)
            except _TERMINAL_FETCH_ERRORS:
                raise
            except Exception as e:
                if attempt >= self._fetch_retries:
                    raise FetchError(f"Gagal memuat data absensi {key.label}: {e}") from e
                attempt += 1
                logger.warning("Fetch of %s/%s failed (attempt %d): %s", key.employee_id, key.label, attempt, e)

    def _apply_loaded(self, month: EmployeeMonth) -> None:
        self._employee = month.employee
        self._store = self._pick_store(month.employee)
        self._registry = registry_for_store(self._store)

        by_date = {
            r.date: r
            for r in month.records
            if r.date.year == self._key.year and r.date.month == self._key.month
        }
        self._records = [
            reconcile_record(by_date.get(d) or blank_record(d), self._registry)
            for d in iter_month_days(self._key.year, self._key.month)
        ]
        self._baseline = tuple(self._records)
        self._has_changes = False
        self._state = WorkflowState.LOADED

    def _pick_store(self, employee: Employee) -> Optional[Store]:
        if self._preferred_store_id is not None:
            store = employee.find_store(self._preferred_store_id)
            if store is not None:
                return store
        return employee.primary_store

    # -- editing ----------------------------------------------------------

    def edit(self, target: Union[int, date], field: str, value) -> AttendanceDayRecord:
        index = self._index_of(target)
        updated = apply_edit(
            self._records[index],
            field,
            value,
            self._registry,
            auto_detect_shift=self._auto_detect_shift,
        )
        self._records[index] = updated
        self._mark_changed()
        return updated

    def replace_records(self, records) -> None:
        """Overwrite days with submitted rows, re-deriving every metric."""
        updated = list(self._records)
        for record in records:
            updated[self._index_of(record.date)] = reconcile_record(
                record, self._registry, auto_detect_shift=self._auto_detect_shift
            )
        self._records = updated
        self._mark_changed()

    def select_store(self, store_id: int) -> None:
        """Use another of the employee's stores as the shift source."""
        if self._employee is None:
            raise ValidationError("Data absensi belum dimuat")
        store = self._employee.find_store(int(store_id))
        if store is None:
            raise ValidationError(f"Toko {store_id} tidak terdaftar untuk karyawan ini")

        self._preferred_store_id = store.store_id
        self._store = store
        self._registry = registry_for_store(store)

        recomputed = [r.recomputed(self._registry) for r in self._records]
        if recomputed != self._records:
            self._records = recomputed
            self._mark_changed()

    def _index_of(self, target: Union[int, date]) -> int:
        if isinstance(target, date):
            for i, r in enumerate(self._records):
                if r.date == target:
                    return i
            raise ValidationError(f"Tanggal {target.isoformat()} di luar bulan {self._key.label}")
        if isinstance(target, int) and 0 <= target < len(self._records):
            return target
        raise ValidationError(f"Baris {target} tidak ada")

    def _mark_changed(self) -> None:
        self._has_changes = True
        if self._state != WorkflowState.SAVING:
            self._state = WorkflowState.EDITING

    # -- saving -----------------------------------------------------------

    def save(self) -> None:
        if self._save_pending:
            raise SaveInProgressError("Penyimpanan sebelumnya masih berjalan")
        if self._employee is None or len(self._records) != days_in_month(self._key.year, self._key.month):
            raise ValidationError("Data absensi belum dimuat")

        key = self._key
        records = tuple(self._records)
        store_id = self._store.store_id if self._store else None

        self._save_pending = True
        self._state = WorkflowState.SAVING
        try:
            self._repository.save_month(key, store_id=store_id, records=records)
        except ValidationError:
            if key == self._key:
                self._state = WorkflowState.EDITING if self._has_changes else WorkflowState.LOADED
            raise
        except Exception as e:
            if key == self._key:
                self._state = WorkflowState.EDITING
            logger.warning("Save of %s/%s failed: %s", key.employee_id, key.label, e)
            raise SaveError(str(e) or "Gagal menyimpan data absensi") from e
        finally:
            self._save_pending = False

        if key != self._key:
            logger.info("Month changed while saving %s; keeping current state", key.label)
            return

        self._baseline = records
        if tuple(self._records) == records:
            self._has_changes = False
            self._state = WorkflowState.LOADED
        else:
            self._state = WorkflowState.EDITING
        logger.info("Saved attendance %s/%s", key.employee_id, key.label)
