"""Linear minute axis anchored at the business day reset hour.

Clock values are "HH:MM" strings. On the linear axis 03:00 is minute 0 and
02:59 of the following calendar day is minute 1439, so an overnight shift and
a post-midnight check-in compare with plain integer arithmetic.
"""

from __future__ import annotations

import re

from ..core.constants import DAY_RESET_HOUR, MINUTES_PER_DAY

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def is_clock(value) -> bool:
    return isinstance(value, str) and _CLOCK_RE.match(value) is not None


def parse_clock(value: str) -> tuple[int, int]:
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid clock value: {value!r}")
    return int(match.group(1)), int(match.group(2))


def to_linear_minutes(value: str, day_reset_hour: int = DAY_RESET_HOUR) -> int:
    hours, minutes = parse_clock(value)
    total = hours * 60 + minutes
    if hours < day_reset_hour:
        total += MINUTES_PER_DAY
    return total - day_reset_hour * 60


def from_linear_minutes(minutes: int, day_reset_hour: int = DAY_RESET_HOUR) -> str:
    total = (minutes + day_reset_hour * 60) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"
