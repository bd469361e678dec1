from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence, Union

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import parse_month
from ...common.validators import finite_or_zero
from ...core import constants
from ...core.enums import LeaveStatus
from ...requests.model import LeaveRequest
from ...shifts.clock import resolve_shift_day, week_start
from ...shifts.model import ShiftConfig
from ...users.model import User
from ..hours import compute_overtime_minutes, live_total_hours
from ..model import PayrollSummary
from .base import PayrollCalculator

logger = logging.getLogger(__name__)

MonthKey = Union[str, date]


def month_key(target_month: MonthKey) -> str:
    if isinstance(target_month, date):
        return f"{target_month.year:04d}-{target_month.month:02d}"
    year, month = parse_month(target_month)
    return f"{year:04d}-{month:02d}"


def month_bounds(target_month: MonthKey) -> tuple[date, date]:
    year, month = parse_month(month_key(target_month))
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def record_shift_day(record: AttendanceRecord, config: ShiftConfig) -> str:
    if record.date:
        return record.date
    if record.check_in is not None:
        return resolve_shift_day(record.check_in, config)
    return ""


def count_leave_days_in_month(leave: LeaveRequest, target_month: MonthKey) -> int:
    """Inclusive calendar days of ``leave`` inside the month."""
    if leave.start_date is None or leave.end_date is None:
        return 0
    month_start, month_end = month_bounds(target_month)
    overlap_start = max(leave.start_date, month_start)
    overlap_end = min(leave.end_date, month_end)
    if overlap_end < overlap_start:
        return 0
    return (overlap_end - overlap_start).days + 1


def monthly_salary(user: User) -> float:
    total = finite_or_zero(user.basic_salary) + finite_or_zero(user.allowances)
    return total or finite_or_zero(user.salary)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary + untaxed overtime - unpaid leave - progressive tax."""

    def overtime_minutes(self, record: AttendanceRecord, config: ShiftConfig) -> float:
        # Closed records are recomputed live so manual edits show immediately.
        if record.check_in is not None and record.check_out is not None:
            return compute_overtime_minutes(record.check_in, record.check_out, config)
        return finite_or_zero(record.overtime_hours) * 60

    def monthly_tax(self, taxable_base: float) -> float:
        salary = max(0.0, taxable_base)
        if salary <= constants.TAX_FREE_THRESHOLD:
            return 0.0
        if salary <= constants.LOWER_BRACKET_LIMIT:
            return (salary - constants.TAX_FREE_THRESHOLD) * constants.LOWER_BRACKET_RATE
        return constants.UPPER_BRACKET_BASE_TAX + (salary - constants.LOWER_BRACKET_LIMIT) * constants.UPPER_BRACKET_RATE

    def hourly_rate(self, salary: float, config: ShiftConfig) -> float:
        if salary <= 0:
            return 0.0
        shift_hours = config.duration_hours or constants.FALLBACK_SHIFT_HOURS
        return (salary / constants.PAYROLL_DAYS_PER_MONTH) / shift_hours

    def unpaid_leave_days(self, user_id: str, leaves: Iterable[LeaveRequest], target_month: MonthKey) -> int:
        return sum(
            count_leave_days_in_month(leave, target_month)
            for leave in leaves
            if leave.user_id == user_id and leave.status == LeaveStatus.APPROVED and not leave.is_paid
        )

    def records_in_month(
        self,
        user_id: str,
        records: Iterable[AttendanceRecord],
        target_month: MonthKey,
        config: ShiftConfig,
    ) -> list[AttendanceRecord]:
        key = month_key(target_month)
        return [r for r in records if r.user_id == user_id and record_shift_day(r, config).startswith(key)]

    def monthly_payroll(
        self,
        user: User,
        records: Sequence[AttendanceRecord],
        leaves: Sequence[LeaveRequest],
        target_month: MonthKey,
        config: ShiftConfig,
    ) -> PayrollSummary:
        basic = finite_or_zero(user.basic_salary) or finite_or_zero(user.salary)
        allowances = finite_or_zero(user.allowances)
        salary = monthly_salary(user)

        month_records = self.records_in_month(user.id, records, target_month, config)
        overtime_hours = sum(self.overtime_minutes(r, config) for r in month_records) / 60
        rate = self.hourly_rate(salary, config)
        overtime_pay = overtime_hours * rate

        unpaid_days = self.unpaid_leave_days(user.id, leaves, target_month)
        leave_deduction = unpaid_days * (salary / constants.PAYROLL_DAYS_PER_MONTH)
        taxable_base = max(0.0, salary - leave_deduction)
        tax = self.monthly_tax(taxable_base)
        salary_after_tax = max(0.0, taxable_base - tax)

        logger.debug(
            "Payroll %s for %s: salary=%.2f overtime=%.2fh unpaid_days=%d tax=%.2f",
            month_key(target_month), user.id, salary, overtime_hours, unpaid_days, tax,
        )
        return PayrollSummary(
            month=month_key(target_month),
            basic=basic,
            allowances=allowances,
            monthly_salary=salary,
            overtime_hours=overtime_hours,
            hourly_rate=rate,
            overtime_pay=overtime_pay,
            unpaid_leave_days=unpaid_days,
            leave_deduction=leave_deduction,
            taxable_base=taxable_base,
            tax=tax,
            salary_after_tax=salary_after_tax,
            net_pay=salary_after_tax + overtime_pay,
        )

    def weekly_overtime(
        self,
        user_id: str,
        records: Iterable[AttendanceRecord],
        now: datetime,
        config: ShiftConfig,
    ) -> float:
        """Hours above the weekly threshold in the current Sunday-started week."""
        start = week_start(now, config).isoformat()
        end = (week_start(now, config) + timedelta(days=7)).isoformat()
        total = sum(
            live_total_hours(r.check_in, r.check_out, r.total_hours, config)
            for r in records
            if r.user_id == user_id and start <= record_shift_day(r, config) < end
        )
        return max(0.0, total - constants.WEEKLY_HOURS_THRESHOLD)

    def paid_leaves_used(
        self,
        user_id: str,
        leaves: Iterable[LeaveRequest],
        target_month: MonthKey,
        *,
        exclude_id: Optional[str] = None,
    ) -> int:
        """Requested paid leaves starting in the month; auto-marked absences don't count."""
        key = month_key(target_month)
        return sum(
            1
            for leave in leaves
            if leave.user_id == user_id
            and leave.id != exclude_id
            and not leave.is_auto_absence
            and leave.is_paid
            and leave.status != LeaveStatus.CANCELLED
            and leave.start_date is not None
            and month_key(leave.start_date) == key
        )

    def paid_leave_allowed(
        self,
        user_id: str,
        leaves: Iterable[LeaveRequest],
        start_date: date,
        *,
        exclude_id: Optional[str] = None,
    ) -> bool:
        """Whether a new leave starting on ``start_date`` may still be paid."""
        used = self.paid_leaves_used(user_id, leaves, start_date, exclude_id=exclude_id)
        return used < constants.PAID_LEAVES_PER_MONTH
