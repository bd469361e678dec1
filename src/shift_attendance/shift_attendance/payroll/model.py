from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class PayrollSummary:
    """Monthly pay breakdown. Overtime pay is added after tax."""

    month: str
    basic: float
    allowances: float
    monthly_salary: float
    overtime_hours: float
    hourly_rate: float
    overtime_pay: float
    unpaid_leave_days: int
    leave_deduction: float
    taxable_base: float
    tax: float
    salary_after_tax: float
    net_pay: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict
