from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..attendance.classifier import classify_check_out
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..core import constants
from ..core.enums import CheckInStatus
from ..core.exceptions import ValidationError
from ..requests.repository import LeaveRepository
from ..shifts.clock import to_local
from ..shifts.model import ShiftConfig
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator, month_key
from .hours import live_total_hours
from .model import PayrollSummary, ReportData


class PayrollReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        leaves: LeaveRepository,
        config: ShiftConfig,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._leaves = leaves
        self._config = config
        self._calculator = calculator or StandardPayrollCalculator()

    def _require_user(self, user_id: str):
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")
        return user

    def payslip(self, user_id: str, target_month: str) -> PayrollSummary:
        user = self._require_user(user_id)
        return self._calculator.monthly_payroll(
            user, self._attendance.list_all(), self._leaves.list_all(), target_month, self._config
        )

    def weekly_overtime(self, user_id: str, *, now: Optional[datetime] = None) -> float:
        return self._calculator.weekly_overtime(user_id, self._attendance.list_all(), now or now_utc(), self._config)

    def build_month_report(self, user_id: str, target_month: str) -> ReportData:
        self._require_user(user_id)
        key = month_key(target_month)
        records = self._calculator.records_in_month(user_id, self._attendance.list_all(), key, self._config)
        records.sort(key=lambda r: (r.date, r.check_in.isoformat() if r.check_in else ""))

        rows: list[dict] = []
        total_hours = 0.0
        overtime_hours = 0.0
        late_count = 0
        for r in records:
            hours = live_total_hours(r.check_in, r.check_out, r.total_hours, self._config)
            overtime = self._calculator.overtime_minutes(r, self._config) / 60
            total_hours += hours
            overtime_hours += overtime
            if r.status == CheckInStatus.LATE:
                late_count += 1
            rows.append(
                {
                    "date": r.date,
                    "check_in": to_local(r.check_in, self._config).strftime("%H:%M") if r.check_in else "-",
                    "check_out": to_local(r.check_out, self._config).strftime("%H:%M") if r.check_out else "-",
                    "check_in_status": r.status.value if r.status else "-",
                    "check_out_status": classify_check_out(r.check_out, self._config).value,
                    "total_hours": round(hours, 2),
                    "overtime_hours": round(overtime, 2),
                }
            )

        leaves = self._leaves.list_all()
        paid_used = self._calculator.paid_leaves_used(user_id, leaves, key)
        absences = sum(
            1
            for leave in leaves
            if leave.user_id == user_id
            and leave.is_auto_absence
            and leave.start_date is not None
            and month_key(leave.start_date) == key
        )
        summary = {
            "month": key,
            "days_worked": len(records),
            "total_hours": round(total_hours, 2),
            "overtime_hours": round(overtime_hours, 2),
            "late_count": late_count,
            "late_remaining": max(0, constants.LATE_ALLOWANCE_PER_MONTH - late_count),
            "paid_leave_remaining": max(0, constants.PAID_LEAVES_PER_MONTH - paid_used),
            "absences": absences,
        }
        return ReportData(rows=rows, summary=summary)
