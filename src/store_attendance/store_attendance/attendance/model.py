from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import ClassVar, Optional, Union

from ..common.datetime_utils import weekday_label
from ..core.enums import AttendanceStatus
from ..shifts.model import ShiftRegistry
from ..users.model import Employee
from .metrics import TimeMetrics, compute_metrics


@dataclass(frozen=True)
class Timesheet:
    """Jam masuk/keluar, shift dan metrik turunannya untuk satu hari."""

    check_in: str = ""
    check_out: str = ""
    shift: str = ""
    metrics: TimeMetrics = field(default_factory=TimeMetrics)

    def recomputed(self, registry: ShiftRegistry) -> "Timesheet":
        metrics = compute_metrics(self.check_in, self.check_out, self.shift, registry)
        if metrics == self.metrics:
            return self
        return replace(self, metrics=metrics)


# Day states. Only Unset and Present carry a timesheet, so a leave or absent
# day cannot hold check-in/check-out/shift values.


@dataclass(frozen=True)
class Unset:
    timesheet: Timesheet = field(default_factory=Timesheet)
    status: ClassVar[AttendanceStatus] = AttendanceStatus.UNSET


@dataclass(frozen=True)
class Present:
    timesheet: Timesheet = field(default_factory=Timesheet)
    status: ClassVar[AttendanceStatus] = AttendanceStatus.PRESENT


@dataclass(frozen=True)
class Leave:
    status: ClassVar[AttendanceStatus] = AttendanceStatus.LEAVE


@dataclass(frozen=True)
class Absent:
    status: ClassVar[AttendanceStatus] = AttendanceStatus.ABSENT


DayState = Union[Unset, Present, Leave, Absent]


def state_for_status(status: AttendanceStatus, timesheet: Optional[Timesheet] = None) -> DayState:
    if status == AttendanceStatus.LEAVE:
        return Leave()
    if status == AttendanceStatus.ABSENT:
        return Absent()

    timesheet = timesheet or Timesheet()
    if status == AttendanceStatus.PRESENT:
        return Present(timesheet)
    return Unset(timesheet)


@dataclass(frozen=True)
class AttendanceDayRecord:
    """Entitas domain: absensi satu karyawan pada satu tanggal."""

    date: date
    day: str
    state: DayState = field(default_factory=Unset)
    notes: str = ""
    record_id: Optional[str] = None

    @property
    def attendance_status(self) -> AttendanceStatus:
        return self.state.status

    @property
    def timesheet(self) -> Optional[Timesheet]:
        if isinstance(self.state, (Unset, Present)):
            return self.state.timesheet
        return None

    @property
    def check_in(self) -> str:
        ts = self.timesheet
        return ts.check_in if ts else ""

    @property
    def check_out(self) -> str:
        ts = self.timesheet
        return ts.check_out if ts else ""

    @property
    def shift(self) -> str:
        ts = self.timesheet
        return ts.shift if ts else ""

    @property
    def metrics(self) -> TimeMetrics:
        ts = self.timesheet
        return ts.metrics if ts else TimeMetrics()

    @property
    def lateness_minutes(self) -> int:
        return self.metrics.lateness_minutes

    @property
    def early_arrival_minutes(self) -> int:
        return self.metrics.early_arrival_minutes

    @property
    def overtime_minutes(self) -> int:
        return self.metrics.overtime_minutes

    @property
    def is_blank(self) -> bool:
        """Nothing worth persisting: unset status, no times, no notes."""
        return (
            self.attendance_status == AttendanceStatus.UNSET
            and not (self.check_in or self.check_out or self.shift)
            and not self.notes
        )

    def with_timesheet(self, timesheet: Timesheet) -> "AttendanceDayRecord":
        return replace(self, state=state_for_status(self.attendance_status, timesheet))

    def recomputed(self, registry: ShiftRegistry) -> "AttendanceDayRecord":
        ts = self.timesheet
        if ts is None:
            return self
        updated = ts.recomputed(registry)
        if updated is ts:
            return self
        return self.with_timesheet(updated)


def blank_record(day_date: date) -> AttendanceDayRecord:
    return AttendanceDayRecord(date=day_date, day=weekday_label(day_date))


@dataclass(frozen=True)
class MonthKey:
    employee_id: str
    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class EmployeeMonth:
    """Read-model hasil fetch: karyawan + baris absensi yang sudah tersimpan."""

    employee: Employee
    records: tuple[AttendanceDayRecord, ...] = ()


@dataclass(frozen=True)
class MonthlySummary:
    present: int
    leave: int
    absent: int
    unset: int
    total_lateness_minutes: int
    total_early_arrival_minutes: int
    total_overtime_minutes: int

    def to_payload(self) -> dict:
        return {
            "hadirCount": self.present,
            "cutiCount": self.leave,
            "alphaCount": self.absent,
            "belumDiaturCount": self.unset,
            "totalLateness": self.total_lateness_minutes,
            "totalEarlyArrival": self.total_early_arrival_minutes,
            "totalOvertime": self.total_overtime_minutes,
        }
