"""Lateness, early arrival and overtime in minutes.

All comparisons happen on the linear day axis (see shifts.clock). A shift
name missing from the registry degrades to 0 with a warning instead of
raising, so one stale record never blocks a whole month.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..shifts.clock import to_linear_minutes
from ..shifts.model import ShiftDefinition, ShiftRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeMetrics:
    lateness_minutes: int = 0
    early_arrival_minutes: int = 0
    overtime_minutes: int = 0


ZERO_METRICS = TimeMetrics()


def _lookup(shift: str, registry: ShiftRegistry, metric: str) -> Optional[ShiftDefinition]:
    definition = registry.find(shift)
    if definition is None:
        logger.warning('Shift "%s" not found in shifts, using 0 %s', shift, metric)
    return definition


def calculate_lateness(check_in: str, shift: str, registry: ShiftRegistry) -> int:
    definition = _lookup(shift, registry, "lateness")
    if definition is None:
        return 0
    return max(0, to_linear_minutes(check_in) - to_linear_minutes(definition.start))


def calculate_early_arrival(check_in: str, shift: str, registry: ShiftRegistry) -> int:
    definition = _lookup(shift, registry, "early arrival")
    if definition is None:
        return 0
    return max(0, to_linear_minutes(definition.start) - to_linear_minutes(check_in))


def calculate_overtime(check_out: str, shift: str, registry: ShiftRegistry) -> int:
    if not check_out:
        return 0

    definition = _lookup(shift, registry, "overtime")
    if definition is None:
        return 0

    start = to_linear_minutes(definition.start)
    end = to_linear_minutes(definition.end)
    checkout = to_linear_minutes(check_out)

    if end <= start:
        end += MINUTES_PER_DAY
    # A checkout before the shift start belongs to the following day.
    if checkout < start:
        checkout += MINUTES_PER_DAY

    return max(0, checkout - end)


def compute_metrics(check_in: str, check_out: str, shift: str, registry: ShiftRegistry) -> TimeMetrics:
    """All three metrics for one day; empty inputs give 0 for what they drive."""
    if not shift:
        return ZERO_METRICS

    lateness = early = 0
    if check_in:
        lateness = calculate_lateness(check_in, shift, registry)
        early = calculate_early_arrival(check_in, shift, registry)

    overtime = calculate_overtime(check_out, shift, registry) if check_out else 0
    return TimeMetrics(lateness_minutes=lateness, early_arrival_minutes=early, overtime_minutes=overtime)
