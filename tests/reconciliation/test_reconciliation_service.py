from __future__ import annotations

from datetime import datetime

import pytz

from shift_attendance.attendance.store_attendance_repository import StoreAttendanceRepository
from shift_attendance.core.enums import Role
from shift_attendance.database.store import InMemoryKeyedStore
from shift_attendance.reconciliation.service import ReconciliationService
from shift_attendance.shifts.model import ShiftConfig
from shift_attendance.users.store_user_repository import StoreUserRepository

KARACHI = pytz.timezone("Asia/Karachi")


def pkt(y, m, d, hh, mm=0):
    return KARACHI.localize(datetime(y, m, d, hh, mm))


def build(store, **kwargs):
    return ReconciliationService(
        StoreAttendanceRepository(store), StoreUserRepository(store), ShiftConfig(), **kwargs
    )


def test_run_relinks_and_refreshes_in_one_save():
    store = InMemoryKeyedStore(
        {
            "users": [{"id": "u-new", "employeeId": "BS-DABA010", "name": "Danish", "role": "EMPLOYEE"}],
            "attendance": [
                {
                    "id": "r1",
                    "userId": "DABA010",
                    "userName": "Danish",
                    "date": "2025-01-06",
                    "checkIn": "2025-01-06T14:30:00Z",
                    "checkOut": "2025-01-07T00:00:00Z",
                    "totalHours": 1,
                }
            ],
        }
    )

    result = build(store).run(now=pkt(2025, 1, 8, 12, 0))

    assert result.changed
    assert store.save_count == 1
    saved = store.load("attendance")[0]
    assert saved["userId"] == "u-new"
    assert saved["totalHours"] == 9.5
    assert saved["overtimeHours"] == 0.5


def test_run_without_changes_does_not_persist():
    store = InMemoryKeyedStore(
        {
            "users": [{"id": "u1", "employeeId": "BS-A001", "name": "Ayesha"}],
            "attendance": [
                {
                    "id": "r1",
                    "userId": "u1",
                    "date": "2025-01-06",
                    "checkIn": "2025-01-06T15:00:00Z",
                    "checkOut": "2025-01-07T00:00:00Z",
                    "totalHours": 9,
                }
            ],
        }
    )

    result = build(store).run(now=pkt(2025, 1, 8, 12, 0))

    assert not result.changed
    assert store.save_count == 0


def test_auto_checkout_runs_only_when_enabled():
    initial = {
        "users": [{"id": "u1", "employeeId": "BS-A001", "name": "Ayesha", "role": "HR"}],
        "attendance": [{"id": "r1", "userId": "u1", "date": "2025-01-06", "checkIn": "2025-01-06T15:00:00Z"}],
    }

    disabled = InMemoryKeyedStore(initial)
    assert not build(disabled).run(now=pkt(2025, 1, 8, 12, 0)).changed

    enabled = InMemoryKeyedStore(initial)
    result = build(
        enabled, auto_checkout_enabled=True, auto_checkout_exempt_roles=(Role.EMPLOYEE,)
    ).run(now=pkt(2025, 1, 8, 12, 0))

    assert result.changed
    assert enabled.load("attendance")[0]["checkOut"] == "2025-01-07T00:00:00+00:00"
