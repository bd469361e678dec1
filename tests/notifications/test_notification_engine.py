from __future__ import annotations

from datetime import datetime

import pytz

from shift_attendance.core.enums import Role, WorkMode
from shift_attendance.notifications.engine import (
    mark_all_read,
    mark_read,
    regenerate_auto_notifications,
    unread_count,
    upsert_notification,
)
from shift_attendance.notifications.model import Notification
from shift_attendance.notifications.profile import build_profile_notifications, missing_fields
from shift_attendance.users.model import EmployeeProfile, User

T0 = pytz.UTC.localize(datetime(2025, 1, 1, 9, 0))
T1 = pytz.UTC.localize(datetime(2025, 1, 2, 9, 0))


def notice(nid="leave-status:l1", user_id="u1", **kwargs):
    return Notification(id=nid, user_id=user_id, title="Leave approved", message="ok", created_at=T0, **kwargs)


def test_new_notification_is_unread():
    items = upsert_notification([], notice(read=True))

    assert items[0].read is False


def test_upsert_keeps_dismissed_notice_read():
    items = [notice(read=True)]
    updated = Notification(id="leave-status:l1", user_id="u1", title="Leave approved", message="changed", created_at=T1)

    items = upsert_notification(items, updated, force_unread=False)

    assert len(items) == 1
    assert items[0].read is True
    assert items[0].message == "changed"
    assert items[0].created_at == T0


def test_force_unread_resets_read_flag():
    items = upsert_notification([notice(read=True)], notice(), force_unread=True)

    assert items[0].read is False


def test_regeneration_preserves_manual_and_read_state():
    manual = notice(read=True)
    stale_auto = Notification(id="profile-incomplete:u2", user_id="u2", title="t", message="m", auto_generated=True)
    kept_auto = Notification(
        id="profile-incomplete:u1", user_id="u1", title="t", message="old", created_at=T0, read=True, auto_generated=True
    )
    generated = [Notification(id="profile-incomplete:u1", user_id="u1", title="t", message="new", created_at=T1)]

    items = regenerate_auto_notifications([manual, stale_auto, kept_auto], generated)

    by_id = {n.id: n for n in items}
    assert by_id["leave-status:l1"] == manual
    assert "profile-incomplete:u2" not in by_id
    assert by_id["profile-incomplete:u1"].read is True
    assert by_id["profile-incomplete:u1"].message == "new"
    assert by_id["profile-incomplete:u1"].created_at == T0


def test_regeneration_is_stable():
    generated = [Notification(id="profile-incomplete:u1", user_id="u1", title="t", message="m", created_at=T0)]
    once = regenerate_auto_notifications([], generated)

    assert regenerate_auto_notifications(once, generated) == once


def test_read_actions():
    items = [notice(), notice("leave-request:l1:c1", user_id="u1"), notice("other", user_id="u2")]

    assert unread_count(items, "u1") == 2
    assert unread_count(mark_read(items, "other"), "u2") == 0
    assert unread_count(mark_all_read(items, "u1"), "u1") == 0
    assert unread_count(mark_all_read(items, "u1"), "u2") == 1


def complete_user(**kwargs):
    data = dict(
        id="u1",
        employee_id="BS-A001",
        name="Ayesha",
        first_name="Ayesha",
        last_name="Malik",
        dob="1990-01-01",
        phone="0300",
        email="a@example.com",
        password="hash",
        pin="1234",
        basic_salary=50_000,
        allowances=0,
        position="Agent",
        role=Role.EMPLOYEE,
        work_mode=WorkMode.ONSITE,
        grade="G1",
        team_lead="Bilal",
    )
    data.update(kwargs)
    return User(**data)


FULL_PROFILE = EmployeeProfile(
    user_id="u1", emergency_contact_name="Sara", emergency_contact_phone="0301", emergency_contact_relation="Sister"
)


def test_complete_user_has_no_missing_fields():
    assert missing_fields(complete_user(), FULL_PROFILE) == []


def test_pin_only_matters_to_hr_notice():
    user = complete_user(pin=None)

    assert missing_fields(user, FULL_PROFILE, include_pin=False) == []
    assert missing_fields(user, FULL_PROFILE) == ["4 Digit PIN"]


def test_profile_notices_for_employee_and_hr():
    hr = complete_user(id="h1", name="Hina", role=Role.HR, pin=None)
    employee = complete_user(id="u1", pin=None, phone=None)
    boss = complete_user(id="s1", role=Role.SUPERADMIN, email=None)
    profiles = [FULL_PROFILE, EmployeeProfile(user_id="h1", emergency_contact_name="X", emergency_contact_phone="1", emergency_contact_relation="Y")]

    notices = build_profile_notifications([hr, employee, boss], profiles, now=T0)

    ids = {n.id for n in notices}
    assert ids == {"profile-incomplete:u1", "hr-incomplete:h1:u1"}
    hr_notice = next(n for n in notices if n.id == "hr-incomplete:h1:u1")
    assert "4 Digit PIN" in hr_notice.message
    assert all(n.auto_generated for n in notices)
