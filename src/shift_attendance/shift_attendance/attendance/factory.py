from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core.enums import WorkMode
from ..shifts.clock import adjust_minutes, checkout_adjusted_minutes, shift_adjusted_minutes, shift_day
from ..shifts.model import FridayExemption, ShiftConfig
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy

FRIDAY = 4


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def is_friday_exempt(
        self,
        *,
        now: datetime,
        config: ShiftConfig,
        employee_id: Optional[str],
        exemption: Optional[FridayExemption],
    ) -> bool:
        if not exemption or not exemption.covers(employee_id):
            return False
        if shift_day(now, config).weekday() != FRIDAY:
            return False
        cutoff = adjust_minutes(parse_hhmm(exemption.cutoff), config)
        return shift_adjusted_minutes(now, config) <= cutoff

    def for_checkin(
        self,
        *,
        now: datetime,
        config: ShiftConfig,
        employee_id: Optional[str] = None,
        work_mode: Optional[WorkMode] = None,
        exemption: Optional[FridayExemption] = None,
    ) -> AttendanceStrategy:
        # Remote staff are not subject to arrival windows.
        if work_mode == WorkMode.REMOTE:
            return NormalStrategy()
        if self.is_friday_exempt(now=now, config=config, employee_id=employee_id, exemption=exemption):
            return NormalStrategy()

        current = shift_adjusted_minutes(now, config)
        if current < config.start_minutes:
            return EarlyStrategy()
        if current <= config.start_minutes + config.grace_period_minutes:
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, check_out: datetime, config: ShiftConfig) -> AttendanceStrategy:
        current = checkout_adjusted_minutes(check_out, config)
        if current < config.end_minutes_adjusted - config.early_checkout_relaxation_minutes:
            return EarlyStrategy()
        if current > config.end_minutes_adjusted:
            return LateStrategy()
        return NormalStrategy()
