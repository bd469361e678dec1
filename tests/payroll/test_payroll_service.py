from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from shift_attendance.attendance.store_attendance_repository import StoreAttendanceRepository
from shift_attendance.core.exceptions import ValidationError
from shift_attendance.database.store import InMemoryKeyedStore
from shift_attendance.payroll.calculator.standard_calculator import StandardPayrollCalculator
from shift_attendance.payroll.service import PayrollReportService
from shift_attendance.requests.store_leave_repository import StoreLeaveRepository
from shift_attendance.shifts.model import ShiftConfig
from shift_attendance.users.store_user_repository import StoreUserRepository

KARACHI = pytz.timezone("Asia/Karachi")


def attendance(rid, day, check_in, check_out, status):
    return {"id": rid, "userId": "u1", "date": day, "checkIn": check_in, "checkOut": check_out, "status": status}


@pytest.fixture
def service():
    store = InMemoryKeyedStore(
        {
            "users": [{"id": "u1", "employeeId": "BS-A001", "name": "Ayesha", "basicSalary": 50000, "allowances": 10000}],
            "attendance": [
                attendance("r1", "2025-01-06", "2025-01-06T14:30:00Z", "2025-01-07T00:00:00Z", "Early"),
                attendance("r2", "2025-01-07", "2025-01-07T16:00:00Z", "2025-01-08T00:00:00Z", "Late"),
                attendance("r3", "2025-01-08", "2025-01-08T16:00:00Z", "2025-01-09T00:00:00Z", "Late"),
                attendance("r4", "2025-01-31", "2025-01-31T16:00:00Z", "2025-02-01T00:00:00Z", "Late"),
                attendance("r5", "2025-02-01", "2025-02-01T16:00:00Z", "2025-02-02T00:00:00Z", "Late"),
            ],
            "leaves": [
                {"id": "l1", "userId": "u1", "startDate": "2025-01-15", "endDate": "2025-01-15", "status": "Approved", "isPaid": True}
            ],
        }
    )
    return PayrollReportService(
        StoreAttendanceRepository(store), StoreUserRepository(store), StoreLeaveRepository(store), ShiftConfig()
    )


def test_payslip_for_month(service):
    payslip = service.payslip("u1", "2025-01")

    assert payslip.overtime_hours == pytest.approx(0.5)
    assert payslip.tax == pytest.approx(100)
    assert payslip.unpaid_leave_days == 0


def test_payslip_unknown_user(service):
    with pytest.raises(ValidationError):
        service.payslip("nobody", "2025-01")


def test_month_report_rows_and_summary(service):
    report = service.build_month_report("u1", "2025-01")

    assert [row["date"] for row in report.rows] == ["2025-01-06", "2025-01-07", "2025-01-08", "2025-01-31"]
    assert report.rows[0]["check_in"] == "19:30"
    assert report.rows[0]["overtime_hours"] == 0.5
    assert report.summary["days_worked"] == 4
    assert report.summary["total_hours"] == pytest.approx(9.5 + 8 * 3)
    assert report.summary["late_count"] == 3
    assert report.summary["late_remaining"] == 0
    assert report.summary["paid_leave_remaining"] == 0


def test_weekly_overtime_below_threshold_is_zero(service):
    now = KARACHI.localize(datetime(2025, 1, 8, 12, 0))

    assert service.weekly_overtime("u1", now=now) == 0


def build_service(attendance_rows, leaves=(), calculator=None):
    store = InMemoryKeyedStore(
        {
            "users": [{"id": "u1", "employeeId": "BS-A001", "name": "Ayesha", "basicSalary": 50000, "allowances": 10000}],
            "attendance": list(attendance_rows),
            "leaves": list(leaves),
        }
    )
    return PayrollReportService(
        StoreAttendanceRepository(store),
        StoreUserRepository(store),
        StoreLeaveRepository(store),
        ShiftConfig(),
        calculator=calculator,
    )


def night_shift(rid, day, next_day):
    # 20:00 to 05:00 PKT, nine hours, no cached totals.
    return attendance(rid, day, f"{day}T15:00:00Z", f"{next_day}T00:00:00Z", "On-Time")


def test_month_report_recomputes_hours_without_cached_totals(service):
    report = service.build_month_report("u1", "2025-01")

    assert [row["total_hours"] for row in report.rows] == [9.5, 8.0, 8.0, 8.0]
    assert report.summary["total_hours"] == pytest.approx(33.5)


def test_month_report_prefers_live_hours_over_stale_cache():
    row = night_shift("r1", "2025-01-06", "2025-01-07")
    row["totalHours"] = 2.0
    service = build_service([row])

    report = service.build_month_report("u1", "2025-01")

    assert report.rows[0]["total_hours"] == 9.0
    assert report.summary["total_hours"] == pytest.approx(9.0)


def test_weekly_overtime_above_forty_hours_in_sunday_week():
    rows = [
        night_shift("sat", "2025-01-04", "2025-01-05"),
        night_shift("sun", "2025-01-05", "2025-01-06"),
        night_shift("mon", "2025-01-06", "2025-01-07"),
        night_shift("tue", "2025-01-07", "2025-01-08"),
        night_shift("wed", "2025-01-08", "2025-01-09"),
        night_shift("thu", "2025-01-09", "2025-01-10"),
    ]
    service = build_service(rows)
    now = KARACHI.localize(datetime(2025, 1, 10, 12, 0))

    # Sunday..Thursday is 45 h; the Saturday before the week does not count.
    assert service.weekly_overtime("u1", now=now) == pytest.approx(5.0)


def test_weekly_overtime_resets_on_sunday():
    rows = [night_shift(f"r{d}", f"2025-01-{d:02d}", f"2025-01-{d + 1:02d}") for d in range(5, 10)]
    service = build_service(rows)
    now = KARACHI.localize(datetime(2025, 1, 12, 12, 0))

    assert service.weekly_overtime("u1", now=now) == 0


class FlatOvertimeCalculator(StandardPayrollCalculator):
    def overtime_minutes(self, record, config):
        return 60

    def weekly_overtime(self, user_id, records, now, config):
        return 7.0


def test_report_uses_injected_calculator():
    service = build_service([night_shift("r1", "2025-01-06", "2025-01-07")], calculator=FlatOvertimeCalculator())

    report = service.build_month_report("u1", "2025-01")

    assert report.rows[0]["overtime_hours"] == 1.0
    assert report.summary["overtime_hours"] == 1.0
    assert service.weekly_overtime("u1", now=KARACHI.localize(datetime(2025, 1, 8, 12, 0))) == 7.0


def test_auto_absences_do_not_use_paid_leave_quota():
    leaves = [
        {
            "id": "auto-absence:u1:2025-01-14",
            "userId": "u1",
            "startDate": "2025-01-14",
            "endDate": "2025-01-14",
            "status": "Approved",
            "isPaid": True,
        }
    ]
    service = build_service([], leaves=leaves)

    report = service.build_month_report("u1", "2025-01")

    assert report.summary["paid_leave_remaining"] == 1
    assert report.summary["absences"] == 1


def test_unpaid_auto_absence_is_deducted_from_payslip():
    leaves = [
        {
            "id": "auto-absence:u1:2025-01-14",
            "userId": "u1",
            "startDate": "2025-01-14",
            "endDate": "2025-01-14",
            "status": "Approved",
            "isPaid": False,
        }
    ]
    service = build_service([], leaves=leaves)

    payslip = service.payslip("u1", "2025-01")

    assert payslip.unpaid_leave_days == 1
    assert payslip.leave_deduction == pytest.approx(60000 / 30)
