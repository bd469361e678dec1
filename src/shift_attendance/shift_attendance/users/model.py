from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..common.validators import clean_text, finite_or_none
from ..core.enums import Role, WorkMode


def _role(value: Any) -> Optional[Role]:
    try:
        return Role(str(value).upper()) if value else None
    except ValueError:
        return None


def _work_mode(value: Any) -> Optional[WorkMode]:
    try:
        return WorkMode(value) if value else None
    except ValueError:
        return None


@dataclass(frozen=True)
class User:
    """Roster entry.

    ``id`` is the stable join key for attendance records. ``employee_id`` is
    the human-facing, occasionally reassigned code used only as a fallback
    when re-linking history.
    """

    id: str
    employee_id: str
    name: str
    work_mode: Optional[WorkMode] = WorkMode.ONSITE
    role: Optional[Role] = Role.EMPLOYEE
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    pin: Optional[str] = None
    basic_salary: Optional[float] = None
    allowances: Optional[float] = None
    salary: Optional[float] = None
    position: Optional[str] = None
    grade: Optional[str] = None
    team_lead: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.work_mode == WorkMode.REMOTE

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=clean_text(data.get("id")),
            employee_id=clean_text(data.get("employeeId")),
            name=clean_text(data.get("name")),
            work_mode=_work_mode(data.get("workMode")),
            role=_role(data.get("role")),
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            dob=data.get("dob"),
            phone=data.get("phone"),
            password=data.get("password"),
            pin=data.get("pin"),
            basic_salary=finite_or_none(data.get("basicSalary")),
            allowances=finite_or_none(data.get("allowances")),
            salary=finite_or_none(data.get("salary")),
            position=data.get("position"),
            grade=data.get("grade"),
            team_lead=data.get("teamLead"),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "employeeId": self.employee_id,
            "name": self.name,
            "workMode": self.work_mode.value if self.work_mode else None,
            "role": self.role.value if self.role else None,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "dob": self.dob,
            "phone": self.phone,
            "password": self.password,
            "pin": self.pin,
            "basicSalary": self.basic_salary,
            "allowances": self.allowances,
            "salary": self.salary,
            "position": self.position,
            "grade": self.grade,
            "teamLead": self.team_lead,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class EmployeeProfile:
    """Self-service profile data (emergency contact)."""

    user_id: str
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    emergency_contact_relation: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "EmployeeProfile":
        return cls(
            user_id=clean_text(data.get("userId")),
            emergency_contact_name=clean_text(data.get("emergencyContactName")),
            emergency_contact_phone=clean_text(data.get("emergencyContactPhone")),
            emergency_contact_relation=clean_text(data.get("emergencyContactRelation")),
        )

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "emergencyContactName": self.emergency_contact_name,
            "emergencyContactPhone": self.emergency_contact_phone,
            "emergencyContactRelation": self.emergency_contact_relation,
        }
