from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from shift_attendance.attendance.store_attendance_repository import StoreAttendanceRepository
from shift_attendance.core.exceptions import ValidationError
from shift_attendance.database.store import InMemoryKeyedStore
from shift_attendance.users.model import EmployeeProfile, User
from shift_attendance.users.service import UserService
from shift_attendance.users.store_user_repository import StoreUserRepository


@pytest.fixture
def store():
    return InMemoryKeyedStore(
        {
            "users": [{"id": "u1", "employeeId": "BS-A001", "name": "Ayesha"}],
            "attendance": [
                {"id": "r1", "userId": "u1", "date": "2025-01-06", "checkIn": "2025-01-06T15:00:00Z"},
                {"id": "r2", "userId": "u2", "date": "2025-01-06", "checkIn": "2025-01-06T15:00:00Z"},
            ],
        }
    )


@pytest.fixture
def service(store):
    return UserService(StoreUserRepository(store), StoreAttendanceRepository(store))


def test_delete_user_removes_their_attendance(service, store):
    assert service.delete_user("u1") == 1
    assert [r["id"] for r in store.load("attendance")] == ["r2"]
    assert store.load("users") == []


def test_delete_unknown_user_raises(service):
    with pytest.raises(ValidationError):
        service.delete_user("nobody")


def test_upsert_hashes_password_once(service):
    saved = service.upsert_user(User(id="u2", employee_id="BS-B002", name="Bilal", password="secret"))

    assert check_password_hash(saved.password, "secret")
    again = service.upsert_user(saved)
    assert again.password == saved.password
    assert {u.id for u in service.list_users()} == {"u1", "u2"}


def test_upsert_requires_name(service):
    with pytest.raises(ValidationError):
        service.upsert_user(User(id="u3", employee_id="BS-C", name=""))


def test_save_profile_replaces_existing(service, store):
    service.save_profile(EmployeeProfile(user_id="u1", emergency_contact_name="A"))
    service.save_profile(EmployeeProfile(user_id="u1", emergency_contact_name="B"))

    profiles = store.load("ess_profiles")
    assert len(profiles) == 1
    assert profiles[0]["emergencyContactName"] == "B"
