from __future__ import annotations

import json
import logging
import re
from typing import Optional

from ..users.model import Store
from .clock import is_clock
from .model import DEFAULT_SHIFT_REGISTRY, ShiftDefinition, ShiftRegistry

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_shift_name(name: str) -> str:
    """"Shift Pagi" -> "shift_pagi"."""
    return _WHITESPACE_RE.sub("_", name.lower())


def _parse_entry(entry) -> ShiftDefinition:
    if not isinstance(entry, dict):
        raise ValueError(f"shift entry must be an object, got {type(entry).__name__}")

    name, start, end = entry.get("name"), entry.get("start"), entry.get("end")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"shift entry has no name: {entry!r}")
    if not is_clock(start) or not is_clock(end):
        raise ValueError(f"shift {name!r} has invalid hours: {start!r}-{end!r}")
    return ShiftDefinition(name=normalize_shift_name(name), start=start, end=end)


def resolve_shifts(store_shift_config: Optional[str]) -> ShiftRegistry:
    """Build the shift registry from a store's serialized shift list.

    The config is a JSON array of {"name", "start", "end"} objects. Anything
    absent, empty or unreadable yields DEFAULT_SHIFT_REGISTRY; this function
    never raises so a broken store configuration cannot block attendance
    calculation.
    """

    if not store_shift_config or not store_shift_config.strip():
        return DEFAULT_SHIFT_REGISTRY

    try:
        parsed = json.loads(store_shift_config)
        if not isinstance(parsed, list):
            raise ValueError(f"expected a list of shifts, got {type(parsed).__name__}")
        if not parsed:
            return DEFAULT_SHIFT_REGISTRY
        return ShiftRegistry(_parse_entry(entry) for entry in parsed)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deeply nested input raises RecursionError.
        logger.warning("Failed to parse store shifts, using default shifts: %s", e)
        return DEFAULT_SHIFT_REGISTRY


def registry_for_store(store: Optional[Store]) -> ShiftRegistry:
    if store is None:
        return DEFAULT_SHIFT_REGISTRY
    return resolve_shifts(store.shifts)
