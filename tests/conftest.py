from __future__ import annotations

import json

import pytest

from src.store_attendance.store_attendance.users.model import Employee, Store


@pytest.fixture
def default_store() -> Store:
    return Store(store_id=1, name="SPBU Sudirman")


@pytest.fixture
def custom_store() -> Store:
    shifts = [
        {"name": "Pagi", "start": "06:00", "end": "14:00"},
        {"name": "Siang", "start": "14:00", "end": "22:00"},
        {"name": "Malam", "start": "22:00", "end": "06:00"},
    ]
    return Store(store_id=2, name="SPBU Gatot Subroto", shifts=json.dumps(shifts))


@pytest.fixture
def employee(default_store, custom_store) -> Employee:
    return Employee(employee_id="emp-1", name="Budi Santoso", stores=(default_store, custom_store))
