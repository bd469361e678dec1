from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_instant, parse_instant, parse_iso_date_or_none
from ..common.validators import clean_text
from ..core.constants import AUTO_ABSENCE_ID_PREFIX
from ..core.enums import LeaveStatus, WfhStatus


def _leave_status(value) -> LeaveStatus:
    try:
        return LeaveStatus(value)
    except ValueError:
        return LeaveStatus.PENDING


@dataclass(frozen=True)
class LeaveRequest:
    """Leave request; ``is_paid`` is decided once, at submission time.

    A missing ``is_paid`` in stored data reads as paid.
    """

    id: str
    user_id: str
    start_date: Optional[date]
    end_date: Optional[date]
    status: LeaveStatus = LeaveStatus.PENDING
    is_paid: bool = True
    user_name: str = ""
    reason: str = ""
    submitted_at: Optional[datetime] = None

    @property
    def is_auto_absence(self) -> bool:
        return self.id.startswith(AUTO_ABSENCE_ID_PREFIX)

    @classmethod
    def from_dict(cls, data: dict) -> "LeaveRequest":
        is_paid = data.get("isPaid")
        return cls(
            id=clean_text(data.get("id")),
            user_id=clean_text(data.get("userId")),
            start_date=parse_iso_date_or_none(data.get("startDate")),
            end_date=parse_iso_date_or_none(data.get("endDate")),
            status=_leave_status(data.get("status")),
            is_paid=True if is_paid is None else bool(is_paid),
            user_name=clean_text(data.get("userName")),
            reason=clean_text(data.get("reason")),
            submitted_at=parse_instant(data.get("submittedAt")),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "reason": self.reason,
            "status": self.status.value,
            "submittedAt": format_instant(self.submitted_at),
            "isPaid": self.is_paid,
        }
        return {k: v for k, v in data.items() if v is not None}

    def covers(self, day: date) -> bool:
        return self.start_date is not None and self.end_date is not None and self.start_date <= day <= self.end_date


def _wfh_status(value) -> WfhStatus:
    try:
        return WfhStatus(value)
    except ValueError:
        return WfhStatus.PENDING


@dataclass(frozen=True)
class WorkFromHomeRequest:
    """Approved requests exempt their days from the absence sweep."""

    id: str
    user_id: str
    start_date: Optional[date]
    end_date: Optional[date]
    status: WfhStatus = WfhStatus.PENDING
    user_name: str = ""
    reason: str = ""
    submitted_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date is not None and self.end_date is not None and self.start_date <= day <= self.end_date

    @classmethod
    def from_dict(cls, data: dict) -> "WorkFromHomeRequest":
        return cls(
            id=clean_text(data.get("id")),
            user_id=clean_text(data.get("userId")),
            start_date=parse_iso_date_or_none(data.get("startDate")),
            end_date=parse_iso_date_or_none(data.get("endDate")),
            status=_wfh_status(data.get("status")),
            user_name=clean_text(data.get("userName")),
            reason=clean_text(data.get("reason")),
            submitted_at=parse_instant(data.get("submittedAt")),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "reason": self.reason,
            "status": self.status.value,
            "submittedAt": format_instant(self.submitted_at),
        }
        return {k: v for k, v in data.items() if v is not None}
