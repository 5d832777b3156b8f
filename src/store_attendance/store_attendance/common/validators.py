from __future__ import annotations

from ..core.exceptions import ValidationError
from ..shifts.clock import is_clock


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} tidak boleh kosong")
    return value.strip()


def require_clock_or_empty(value, field_name: str) -> str:
    """Accept "HH:MM" or an empty value (cleared field)."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} harus berupa teks jam (HH:MM)")
    value = value.strip()
    if value and not is_clock(value):
        raise ValidationError(f"{field_name} tidak valid (HH:MM)")
    return value


def require_month(year: int, month: int) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Tahun/bulan tidak valid")
    if not 1 <= month <= 12:
        raise ValidationError("Bulan harus antara 1 dan 12")
    if not 1 <= year <= 9999:
        raise ValidationError("Tahun tidak valid")
    return year, month
