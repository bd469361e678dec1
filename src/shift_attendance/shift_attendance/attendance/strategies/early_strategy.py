from __future__ import annotations

from ...core.enums import CheckInStatus, CheckOutStatus
from .base import AttendanceStrategy, StatusDecision


class EarlyStrategy(AttendanceStrategy):
    """Arrived before shift start, or left before the relaxed shift end."""

    def decide_checkin(self, *, minutes: int, start_minutes: int) -> StatusDecision:
        return StatusDecision(
            check_in=CheckInStatus.EARLY,
            note=f"Arrived {start_minutes - minutes} min early",
        )

    def decide_checkout(self, *, minutes: int, end_minutes: int) -> StatusDecision:
        return StatusDecision(
            check_out=CheckOutStatus.EARLY,
            note=f"Left {end_minutes - minutes} min early",
        )
