from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.validators import finite_or_none
from ..core.enums import Role
from ..users.model import EmployeeProfile, User
from .model import Notification


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def missing_fields(user: User, profile: Optional[EmployeeProfile] = None, *, include_pin: bool = True) -> list[str]:
    """Human-readable names of the HR fields still missing for ``user``."""
    missing: list[str] = []
    if _blank(user.first_name):
        missing.append("First Name")
    if _blank(user.last_name):
        missing.append("Last Name")
    if _blank(user.dob):
        missing.append("Date of Birth")
    if _blank(user.phone):
        missing.append("Phone Number")
    if _blank(user.email):
        missing.append("Email Address")
    if _blank(user.password):
        missing.append("Security Key (Password)")
    if include_pin and user.role != Role.HR and len((user.pin or "").strip()) != 4:
        missing.append("4 Digit PIN")
    if _blank(user.employee_id):
        missing.append("Employee ID")
    if finite_or_none(user.basic_salary) is None:
        missing.append("Basic Salary")
    if finite_or_none(user.allowances) is None:
        missing.append("Allowances")
    if _blank(user.position):
        missing.append("Job Position")
    if user.role is None:
        missing.append("Corporate Role")
    if user.work_mode is None:
        missing.append("Work Mode")
    if _blank(user.grade):
        missing.append("Employee Grade")
    if _blank(user.team_lead):
        missing.append("Team Lead")
    if profile is None or _blank(profile.emergency_contact_name):
        missing.append("Emergency Contact")
    if profile is None or _blank(profile.emergency_contact_phone):
        missing.append("Emergency Phone")
    if profile is None or _blank(profile.emergency_contact_relation):
        missing.append("Emergency Relation")
    return missing


def build_profile_notifications(
    users: Sequence[User],
    profiles: Iterable[EmployeeProfile],
    *,
    now: datetime,
) -> list[Notification]:
    """Auto notices for incomplete profiles: one to the employee, one per HR user."""
    by_user = {p.user_id: p for p in profiles}
    hr_users = [u for u in users if u.role == Role.HR]
    notices: list[Notification] = []

    for target in users:
        if target.role == Role.SUPERADMIN:
            continue
        profile = by_user.get(target.id)

        missing_self = missing_fields(target, profile, include_pin=False)
        if missing_self:
            notices.append(
                Notification(
                    id=f"profile-incomplete:{target.id}",
                    user_id=target.id,
                    title="Profile incomplete",
                    message=f"Missing: {', '.join(missing_self)}",
                    created_at=now,
                    auto_generated=True,
                )
            )

        missing_hr = missing_fields(target, profile, include_pin=True)
        if not missing_hr:
            continue
        for hr in hr_users:
            if hr.id == target.id:
                continue
            notices.append(
                Notification(
                    id=f"hr-incomplete:{hr.id}:{target.id}",
                    user_id=hr.id,
                    title="Employee details incomplete",
                    message=f"{target.name} ({target.employee_id}) missing: {', '.join(missing_hr)}",
                    created_at=now,
                    auto_generated=True,
                )
            )
    return notices
