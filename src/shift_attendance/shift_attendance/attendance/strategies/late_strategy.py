from __future__ import annotations

from ...core.enums import CheckInStatus, CheckOutStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in; a departure after shift end counts as overtime."""

    def decide_checkin(self, *, minutes: int, start_minutes: int) -> StatusDecision:
        return StatusDecision(
            check_in=CheckInStatus.LATE,
            note=f"Late by {minutes - start_minutes} min",
        )

    def decide_checkout(self, *, minutes: int, end_minutes: int) -> StatusDecision:
        return StatusDecision(
            check_out=CheckOutStatus.OVERTIME,
            note=f"Overtime {minutes - end_minutes} min",
        )
