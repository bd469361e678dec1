from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import CheckInStatus, CheckOutStatus


@dataclass(frozen=True)
class StatusDecision:
    check_in: Optional[CheckInStatus] = None
    check_out: Optional[CheckOutStatus] = None
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status.

    Strategies are named after where the event falls relative to the shift
    boundary: before it, inside the allowed window, or after it.
    """

    @abstractmethod
    def decide_checkin(self, *, minutes: int, start_minutes: int) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, minutes: int, end_minutes: int) -> StatusDecision:
        raise NotImplementedError
