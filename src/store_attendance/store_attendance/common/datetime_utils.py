from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Iterator

from ..core.constants import DATE_FORMAT

# Monday first, matching date.weekday().
WEEKDAY_LABELS = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    ISO timestamps ("2024-05-01T00:00:00.000Z") are accepted; only the date
    part is used.
    """
    return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()


def weekday_label(value: date) -> str:
    return WEEKDAY_LABELS[value.weekday()]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month_days(year: int, month: int) -> Iterator[date]:
    for day in range(1, days_in_month(year, month) + 1):
        yield date(year, month, day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months, wrapping across years."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1

