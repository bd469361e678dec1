from __future__ import annotations

from datetime import date, datetime

import pytest
import pytz

from shift_attendance.attendance.model import AttendanceRecord
from shift_attendance.attendance.store_attendance_repository import StoreAttendanceRepository
from shift_attendance.core.enums import LeaveStatus, Role, WfhStatus
from shift_attendance.core.exceptions import ValidationError
from shift_attendance.database.store import InMemoryKeyedStore
from shift_attendance.reconciliation.engine import auto_mark_absences
from shift_attendance.reconciliation.service import AbsenceService
from shift_attendance.requests.model import LeaveRequest, WorkFromHomeRequest
from shift_attendance.requests.store_leave_repository import StoreLeaveRepository
from shift_attendance.requests.store_wfh_repository import StoreWfhRepository
from shift_attendance.shifts.model import ShiftConfig
from shift_attendance.users.model import User
from shift_attendance.users.store_user_repository import StoreUserRepository

KARACHI = pytz.timezone("Asia/Karachi")
MONDAY = date(2025, 1, 6)
TUESDAY = date(2025, 1, 7)

USERS = [
    User(id="u1", employee_id="BS-A001", name="Ayesha", role=Role.EMPLOYEE),
    User(id="u2", employee_id="BS-A002", name="Bilal", role=Role.EMPLOYEE),
    User(id="s1", employee_id="BS-S001", name="Root", role=Role.SUPERADMIN),
]


def present(user_id, day):
    return AttendanceRecord(
        id=f"r-{user_id}",
        user_id=user_id,
        user_name="",
        date=day.isoformat(),
        check_in=KARACHI.localize(datetime(day.year, day.month, day.day, 20, 0)),
    )


def absences(result):
    return [l for l in result.records if l.is_auto_absence]


def test_marks_missing_employees_absent_unpaid():
    result = auto_mark_absences([], [present("u1", MONDAY)], USERS, [], MONDAY)

    assert result.changed
    [absence] = absences(result)
    assert absence.id == "auto-absence:u2:2025-01-06"
    assert absence.user_id == "u2"
    assert absence.start_date == absence.end_date == MONDAY
    assert absence.status == LeaveStatus.APPROVED
    assert absence.reason == "Auto marked absence"
    assert not absence.is_paid


def test_second_run_changes_nothing():
    first = auto_mark_absences([], [], USERS, [], MONDAY)
    second = auto_mark_absences(first.records, [], USERS, [], MONDAY)

    assert len(absences(first)) == 2
    assert not second.changed
    assert second.records == first.records


def test_allowance_pays_first_absences_of_month():
    first = auto_mark_absences([], [], USERS[:1], [], MONDAY, allowance=1)
    second = auto_mark_absences(first.records, [], USERS[:1], [], TUESDAY, allowance=1)

    paid = {l.start_date: l.is_paid for l in absences(second)}
    assert paid == {MONDAY: True, TUESDAY: False}


def test_allowance_restarts_each_month():
    earlier = LeaveRequest(
        id="auto-absence:u1:2024-12-30",
        user_id="u1",
        start_date=date(2024, 12, 30),
        end_date=date(2024, 12, 30),
        status=LeaveStatus.APPROVED,
    )

    result = auto_mark_absences([earlier], [], USERS[:1], [], MONDAY, allowance=1)

    assert absences(result)[-1].is_paid


def test_leave_and_approved_wfh_cover_the_day():
    leaves = [
        LeaveRequest(id="l1", user_id="u1", start_date=date(2025, 1, 5), end_date=date(2025, 1, 8), status=LeaveStatus.PENDING)
    ]
    wfh = [
        WorkFromHomeRequest(id="w1", user_id="u2", start_date=MONDAY, end_date=MONDAY, status=WfhStatus.APPROVED)
    ]

    result = auto_mark_absences(leaves, [], USERS, wfh, MONDAY)

    assert not result.changed


def test_cancelled_leave_and_pending_wfh_do_not_cover_the_day():
    leaves = [LeaveRequest(id="l1", user_id="u1", start_date=MONDAY, end_date=MONDAY, status=LeaveStatus.CANCELLED)]
    wfh = [WorkFromHomeRequest(id="w1", user_id="u2", start_date=MONDAY, end_date=MONDAY, status=WfhStatus.PENDING)]

    result = auto_mark_absences(leaves, [], USERS, wfh, MONDAY)

    assert sorted(l.user_id for l in absences(result)) == ["u1", "u2"]


def test_non_working_day_is_skipped():
    saturday = date(2025, 1, 11)

    assert not auto_mark_absences([], [], USERS, [], saturday).changed
    assert auto_mark_absences([], [], USERS, [], saturday, working_days=("Sat",)).changed


def test_malformed_leave_batch_raises():
    with pytest.raises(ValidationError):
        auto_mark_absences([{"id": "l1"}], [], USERS, [], MONDAY)


@pytest.fixture
def store():
    return InMemoryKeyedStore(
        {
            "users": [u.to_dict() for u in USERS],
            "attendance": [
                {
                    "id": "r1",
                    "userId": "u1",
                    "date": "2025-01-06",
                    "checkIn": "2025-01-06T15:00:00Z",
                    "checkOut": "2025-01-07T00:00:00Z",
                    "status": "On-Time",
                }
            ],
        }
    )


def build(store, **kwargs):
    return AbsenceService(
        StoreAttendanceRepository(store),
        StoreUserRepository(store),
        StoreLeaveRepository(store),
        StoreWfhRepository(store),
        ShiftConfig(),
        **kwargs,
    )


def test_service_marks_previous_shift_day_and_saves_once(store):
    # 02:00 Wednesday still belongs to Tuesday's shift, so Monday is checked.
    now = KARACHI.localize(datetime(2025, 1, 8, 2, 0))

    first = build(store).mark_absences(now=now)
    saves = store.save_count
    second = build(store).mark_absences(now=now)

    assert first.changed
    assert [l["id"] for l in store.load("leaves")] == ["auto-absence:u2:2025-01-06"]
    assert not second.changed
    assert store.save_count == saves
