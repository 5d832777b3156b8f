from __future__ import annotations

import pytest

from src.store_attendance.store_attendance.attendance.model import EmployeeMonth, MonthKey
from src.store_attendance.store_attendance.attendance.service import AttendanceService
from src.store_attendance.store_attendance.container import Container
from src.store_attendance.store_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.store_attendance.store_attendance.main import create_app


class FakeMonthlyAttendance:
    def __init__(self, employee):
        self.employee = employee
        self.rows = {}
        self.save_error = None

    def fetch_month(self, key: MonthKey) -> EmployeeMonth:
        if key.employee_id == "emp-locked":
            raise AuthorizationError("Tidak boleh melihat absensi karyawan ini")
        if key.employee_id != self.employee.employee_id:
            raise NotFoundError("Karyawan tidak ditemukan")
        return EmployeeMonth(employee=self.employee, records=tuple(self.rows.values()))

    def save_month(self, key: MonthKey, *, store_id, records) -> None:
        if self.save_error:
            raise self.save_error
        self.rows = {r.date: r for r in records if not r.is_blank}


@pytest.fixture
def repo(employee):
    return FakeMonthlyAttendance(employee)


@pytest.fixture
def client(monkeypatch, repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(conn=None, attendance_repo=repo, attendance_service=AttendanceService(repo))
    app = create_app(container=container)
    return app.test_client()


def test_get_month(client):
    res = client.get("/api/employees/emp-1/attendance/2024/4")

    assert res.status_code == 200
    body = res.get_json()
    assert len(body["attendanceData"]) == 30
    assert body["selectedStoreId"] == 1
    assert [o["value"] for o in body["shiftOptions"]] == ["pagi", "siang", "malam"]


def test_get_month_errors(client):
    assert client.get("/api/employees/emp-404/attendance/2024/4").status_code == 404
    assert client.get("/api/employees/emp-locked/attendance/2024/4").status_code == 403

    res = client.get("/api/employees/emp-1/attendance/2024/13")
    assert res.status_code == 400
    assert "message" in res.get_json()


def test_put_month(client, repo):
    rows = [{"date": "2024-04-01", "checkIn": "07:10", "checkOut": "15:05", "shift": "pagi", "attendanceStatus": "hadir"}]

    res = client.put("/api/employees/emp-1/attendance/2024/4", json={"attendanceData": rows, "storeId": 2})

    assert res.status_code == 200
    body = res.get_json()
    assert body["message"] == "Data absensi berhasil disimpan"
    assert body["selectedStoreId"] == 2
    assert body["attendanceData"][0]["latenessMinutes"] == 70
    assert len(repo.rows) == 1


def test_put_month_validation(client):
    assert client.put("/api/employees/emp-1/attendance/2024/4", json={"rows": []}).status_code == 400

    res = client.put(
        "/api/employees/emp-1/attendance/2024/4",
        json={"attendanceData": [{"date": "2024-04-01", "checkIn": "25:00"}]},
    )
    assert res.status_code == 400


def test_put_month_save_failure(client, repo):
    repo.save_error = RuntimeError("koneksi terputus")

    res = client.put("/api/employees/emp-1/attendance/2024/4", json={"attendanceData": []})

    assert res.status_code == 502
    assert "koneksi terputus" in res.get_json()["message"]


def test_export_csv(client):
    res = client.get("/api/employees/emp-1/attendance/2024/4/export.csv")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "absensi_Budi_Santoso_2024_04.csv" in res.headers["Content-Disposition"]
    text = res.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("date,day,check_in")
    assert len(text.splitlines()) == 31


def test_detect_shift(client):
    res = client.get("/api/shifts/detect?check_in=21:40")
    assert res.status_code == 200
    assert res.get_json() == {"checkIn": "21:40", "shift": "malam"}

    assert client.get("/api/shifts/detect?check_in=nope").status_code == 400


def test_put_month_without_store_is_a_validation_error(client, repo):
    repo.save_error = ValidationError("Karyawan belum ditugaskan ke toko mana pun")

    res = client.put("/api/employees/emp-1/attendance/2024/4", json={"attendanceData": []})

    assert res.status_code == 400
    assert res.get_json()["message"] == "Karyawan belum ditugaskan ke toko mana pun"
