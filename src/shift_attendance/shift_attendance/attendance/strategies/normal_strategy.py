from __future__ import annotations

from ...core.enums import CheckInStatus, CheckOutStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, normal check-out."""

    def decide_checkin(self, *, minutes: int, start_minutes: int) -> StatusDecision:
        return StatusDecision(check_in=CheckInStatus.ON_TIME)

    def decide_checkout(self, *, minutes: int, end_minutes: int) -> StatusDecision:
        return StatusDecision(check_out=CheckOutStatus.ON_TIME)
