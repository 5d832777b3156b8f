from __future__ import annotations

from .clock import to_linear_minutes
from .model import ShiftRegistry


def detect_shift(check_in: str, registry: ShiftRegistry) -> str:
    """Guess the shift whose start is closest to the check-in time.

    Distances are measured on the linear day axis. On an exact tie the shift
    listed first in the registry wins.
    """

    check_in_minutes = to_linear_minutes(check_in)

    closest = None
    min_difference = None
    for name, shift in registry.items():
        difference = abs(check_in_minutes - to_linear_minutes(shift.start))
        if min_difference is None or difference < min_difference:
            closest = name
            min_difference = difference
    return closest
