from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status kehadiran harian yang disimpan di basis data."""

    UNSET = "belum_diatur"
    PRESENT = "hadir"
    LEAVE = "cuti"
    ABSENT = "alpha"

    @property
    def is_inert(self) -> bool:
        """Leave and absent days carry no time fields."""
        return self in (AttendanceStatus.LEAVE, AttendanceStatus.ABSENT)


class WorkflowState(str, Enum):
    """Lifecycle of one employee-month being reconciled."""

    LOADED = "LOADED"
    EDITING = "EDITING"
    SAVING = "SAVING"
