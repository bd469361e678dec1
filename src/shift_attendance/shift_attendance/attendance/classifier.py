from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import CheckInStatus, CheckOutStatus, WorkMode
from ..shifts.clock import checkout_adjusted_minutes, shift_adjusted_minutes
from ..shifts.model import FridayExemption, ShiftConfig
from .factory import AttendanceStrategyFactory
from .strategies.base import StatusDecision

_factory = AttendanceStrategyFactory()


def decide_check_in(
    instant: datetime,
    config: ShiftConfig,
    *,
    employee_id: Optional[str] = None,
    work_mode: Optional[WorkMode] = None,
    exemption: Optional[FridayExemption] = None,
) -> StatusDecision:
    strategy = _factory.for_checkin(
        now=instant, config=config, employee_id=employee_id, work_mode=work_mode, exemption=exemption
    )
    return strategy.decide_checkin(minutes=shift_adjusted_minutes(instant, config), start_minutes=config.start_minutes)


def classify_check_in(
    instant: datetime,
    config: ShiftConfig,
    *,
    employee_id: Optional[str] = None,
    work_mode: Optional[WorkMode] = None,
    exemption: Optional[FridayExemption] = None,
) -> CheckInStatus:
    decision = decide_check_in(instant, config, employee_id=employee_id, work_mode=work_mode, exemption=exemption)
    return decision.check_in or CheckInStatus.ON_TIME


def classify_check_out(instant: Optional[datetime], config: ShiftConfig) -> CheckOutStatus:
    if instant is None:
        return CheckOutStatus.ACTIVE
    strategy = _factory.for_checkout(check_out=instant, config=config)
    decision = strategy.decide_checkout(
        minutes=checkout_adjusted_minutes(instant, config), end_minutes=config.end_minutes_adjusted
    )
    return decision.check_out or CheckOutStatus.ON_TIME
