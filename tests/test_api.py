from __future__ import annotations

import pytest

from shift_attendance.database.store import InMemoryKeyedStore
from shift_attendance.main import create_app


@pytest.fixture
def store():
    return InMemoryKeyedStore(
        {
            "users": [
                {"id": "u1", "employeeId": "BS-A001", "name": "Ayesha", "role": "EMPLOYEE", "password": "x"},
                {"id": "c1", "employeeId": "BS-C001", "name": "Chief", "role": "CEO"},
                {"id": "h1", "employeeId": "BS-H001", "name": "Hina", "role": "HR"},
            ]
        }
    )


@pytest.fixture
def client(store):
    app = create_app("config.testing", store=store)
    return app.test_client()


def test_check_in_then_out(client):
    resp = client.post("/api/attendance/checkin", json={"userId": "u1"})
    assert resp.status_code == 200
    assert resp.get_json()["record"]["userId"] == "u1"

    again = client.post("/api/attendance/checkin", json={"userId": "u1"})
    assert again.status_code == 400
    assert again.get_json()["success"] is False

    out = client.post("/api/attendance/checkout", json={"userId": "u1"})
    assert out.status_code == 200
    assert "checkOut" in out.get_json()["record"]


def test_check_in_unknown_user_is_a_bad_request(client):
    resp = client.post("/api/attendance/checkin", json={"userId": "ghost"})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Employee does not exist"}


def test_history_and_reports(client):
    client.post("/api/attendance/checkin", json={"userId": "u1"})

    history = client.get("/api/attendance/history?userId=u1").get_json()
    assert len(history["items"]) == 1

    assert client.get("/api/reports/monthly?userId=u1").status_code == 400
    payslip = client.get("/api/payroll/payslip?userId=u1&month=2025-01").get_json()
    assert payslip["payslip"]["month"] == "2025-01"
    assert client.get("/api/payroll/weekly-overtime?userId=u1").get_json()["success"] is True


def test_reconcile_endpoint(client):
    resp = client.post("/api/attendance/reconcile")

    assert resp.get_json() == {"success": True, "changed": False, "count": 0}


def test_leave_workflow(client):
    created = client.post(
        "/api/leaves", json={"userId": "u1", "startDate": "2025-01-10", "endDate": "2025-01-11", "reason": "Trip"}
    )
    assert created.status_code == 201
    leave_id = created.get_json()["leave"]["id"]

    forbidden = client.post(f"/api/leaves/{leave_id}/approve", json={"actorId": "h1"})
    assert forbidden.status_code == 403

    approved = client.post(f"/api/leaves/{leave_id}/approve", json={"actorId": "c1"})
    assert approved.get_json()["leave"]["status"] == "Approved"

    notices = client.get("/api/notifications?userId=u1").get_json()
    assert notices["unread"] == 1
    client.post("/api/notifications/read-all", json={"userId": "u1"})
    assert client.get("/api/notifications?userId=u1").get_json()["unread"] == 0


def test_users_endpoints_hide_secrets(client):
    users = client.get("/api/users").get_json()["items"]

    assert all("password" not in u for u in users)
    assert client.delete("/api/users/u1").get_json()["success"] is True


def test_refresh_profile_notices(client):
    resp = client.post("/api/notifications/refresh")

    assert resp.get_json()["active"] > 0


def test_wfh_workflow(client):
    created = client.post(
        "/api/wfh", json={"userId": "u1", "startDate": "2025-01-10", "endDate": "2025-01-10", "reason": "Plumber"}
    )
    assert created.status_code == 201
    request_id = created.get_json()["request"]["id"]

    assert client.post(f"/api/wfh/{request_id}/approve", json={"actorId": "h1"}).status_code == 403
    approved = client.post(f"/api/wfh/{request_id}/approve", json={"actorId": "c1"})
    assert approved.get_json()["request"]["status"] == "Approved"
    assert [w["id"] for w in client.get("/api/wfh?userId=u1").get_json()["items"]] == [request_id]


def test_mark_absences_endpoint(client):
    resp = client.post("/api/attendance/absences")

    assert resp.status_code == 200
    assert resp.get_json()["success"] is True
