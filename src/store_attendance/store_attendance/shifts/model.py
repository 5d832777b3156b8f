from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional

from .clock import to_linear_minutes


@dataclass(frozen=True)
class ShiftDefinition:
    """Entitas domain: shift kerja bernama dengan jam mulai/selesai."""

    name: str
    start: str
    end: str

    @property
    def is_overnight(self) -> bool:
        """True when the end falls on the next business day (e.g. malam 23:00-07:00)."""
        return to_linear_minutes(self.end) <= to_linear_minutes(self.start)

    @property
    def label(self) -> str:
        title = self.name[:1].upper() + self.name[1:].replace("_", " ")
        return f"{title} ({self.start}-{self.end})"


class ShiftRegistry(Mapping[str, ShiftDefinition]):
    """Read-only shift table of one store, in insertion order."""

    def __init__(self, shifts: Iterable[ShiftDefinition]):
        table: dict[str, ShiftDefinition] = {}
        for shift in shifts:
            table[shift.name] = shift
        if not table:
            raise ValueError("A shift registry needs at least one shift")
        self._shifts = table

    def __getitem__(self, name: str) -> ShiftDefinition:
        return self._shifts[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._shifts)

    def __len__(self) -> int:
        return len(self._shifts)

    def find(self, name: str) -> Optional[ShiftDefinition]:
        return self._shifts.get(name)

    def options(self) -> list[dict]:
        """Select options for the UI: value=shift key, label with hours."""
        return [{"value": s.name, "label": s.label} for s in self._shifts.values()]

    def __repr__(self) -> str:
        return f"ShiftRegistry({list(self._shifts.values())!r})"


# Standard SPBU shifts used when a store has no usable custom configuration.
DEFAULT_SHIFT_REGISTRY = ShiftRegistry(
    [
        ShiftDefinition(name="pagi", start="07:00", end="15:00"),
        ShiftDefinition(name="siang", start="15:00", end="23:00"),
        ShiftDefinition(name="malam", start="23:00", end="07:00"),
    ]
)

