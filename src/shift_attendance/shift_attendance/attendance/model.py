from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_instant, parse_instant
from ..common.validators import clean_text, finite_or_none
from ..core.enums import CheckInStatus


def _status(value) -> Optional[CheckInStatus]:
    try:
        return CheckInStatus(value) if value else None
    except ValueError:
        return None


@dataclass(frozen=True)
class AttendanceRecord:
    """One check-in/check-out pair.

    ``date`` is the shift day, not the calendar day of ``check_in``.
    ``total_hours`` and ``overtime_hours`` are a cache over
    (check_in, check_out, ShiftConfig); ``overtime_hours`` is None when there
    was no overtime. ``check_in`` is None only for a corrupt stored row.
    """

    id: str
    user_id: str
    user_name: str
    date: str
    check_in: Optional[datetime]
    check_out: Optional[datetime] = None
    status: Optional[CheckInStatus] = None
    total_hours: Optional[float] = None
    overtime_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            id=clean_text(data.get("id")),
            user_id=clean_text(data.get("userId")),
            user_name=clean_text(data.get("userName")),
            date=clean_text(data.get("date"))[:10],
            check_in=parse_instant(data.get("checkIn")),
            check_out=parse_instant(data.get("checkOut")),
            status=_status(data.get("status")),
            total_hours=finite_or_none(data.get("totalHours")),
            overtime_hours=finite_or_none(data.get("overtimeHours")),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "date": self.date,
            "checkIn": format_instant(self.check_in),
            "checkOut": format_instant(self.check_out),
            "status": self.status.value if self.status else None,
            "totalHours": self.total_hours,
            "overtimeHours": self.overtime_hours,
        }
        return {k: v for k, v in data.items() if v is not None}
