from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Store:
    """Entitas domain: Toko (SPBU) tempat karyawan bertugas.

    `shifts` is the raw serialized shift table as stored on the store row;
    only the shift registry module parses it.
    """

    store_id: int
    name: str
    shifts: Optional[str] = None
    entry_time_start: Optional[str] = None
    entry_time_end: Optional[str] = None
    exit_time_start: Optional[str] = None
    exit_time_end: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {"id": self.store_id, "name": self.name}
        for key, value in (
            ("entryTimeStart", self.entry_time_start),
            ("entryTimeEnd", self.entry_time_end),
            ("exitTimeStart", self.exit_time_start),
            ("exitTimeEnd", self.exit_time_end),
        ):
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class Employee:
    """Entitas domain: Karyawan beserta daftar toko tempat ia ditugaskan."""

    employee_id: str
    name: str
    stores: tuple[Store, ...] = field(default_factory=tuple)

    def find_store(self, store_id: int) -> Optional[Store]:
        for store in self.stores:
            if store.store_id == store_id:
                return store
        return None

    @property
    def primary_store(self) -> Optional[Store]:
        return self.stores[0] if self.stores else None

    def to_payload(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "stores": [s.to_payload() for s in self.stores],
        }
