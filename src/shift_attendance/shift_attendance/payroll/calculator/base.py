from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Sequence

from ...attendance.model import AttendanceRecord
from ...requests.model import LeaveRequest
from ...shifts.model import ShiftConfig
from ...users.model import User
from ..model import PayrollSummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def overtime_minutes(self, record: AttendanceRecord, config: ShiftConfig) -> float:
        raise NotImplementedError

    @abstractmethod
    def monthly_tax(self, taxable_base: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def records_in_month(
        self,
        user_id: str,
        records: Iterable[AttendanceRecord],
        target_month,
        config: ShiftConfig,
    ) -> list[AttendanceRecord]:
        raise NotImplementedError

    @abstractmethod
    def monthly_payroll(
        self,
        user: User,
        records: Sequence[AttendanceRecord],
        leaves: Sequence[LeaveRequest],
        target_month,
        config: ShiftConfig,
    ) -> PayrollSummary:
        raise NotImplementedError

    @abstractmethod
    def weekly_overtime(
        self,
        user_id: str,
        records: Iterable[AttendanceRecord],
        now: datetime,
        config: ShiftConfig,
    ) -> float:
        raise NotImplementedError

    @abstractmethod
    def paid_leaves_used(self, user_id: str, leaves: Iterable[LeaveRequest], target_month) -> int:
        raise NotImplementedError
