from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Corporate role used for approvals and notice routing."""

    SUPERADMIN = "SUPERADMIN"
    CEO = "CEO"
    HR = "HR"
    EMPLOYEE = "EMPLOYEE"


class WorkMode(str, Enum):
    ONSITE = "Onsite"
    REMOTE = "Remote"


class CheckInStatus(str, Enum):
    """Arrival status stored on the attendance record."""

    EARLY = "Early"
    ON_TIME = "On-Time"
    LATE = "Late"


class CheckOutStatus(str, Enum):
    """Departure status; derived at display time, never stored."""

    EARLY = "Early"
    ON_TIME = "On-Time"
    OVERTIME = "Overtime"
    ACTIVE = "Active"


class LeaveStatus(str, Enum):
    """Approval flow state of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class WfhStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
