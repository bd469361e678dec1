from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable

from ..common.datetime_utils import parse_hhmm
from ..core import constants
from ..core.constants import MINUTES_PER_DAY


@dataclass(frozen=True)
class ShiftConfig:
    """Process-wide shift definition.

    ``start``/``end`` are wall-clock "HH:MM" values in ``timezone``. When
    ``end`` is earlier than ``start`` the shift spans midnight. ``end == start``
    is tolerated as a zero-duration daytime shift.
    """

    start: str = constants.DEFAULT_SHIFT_START
    end: str = constants.DEFAULT_SHIFT_END
    grace_period_minutes: int = constants.DEFAULT_GRACE_PERIOD_MINUTES
    early_checkout_relaxation_minutes: int = constants.DEFAULT_EARLY_CHECKOUT_RELAXATION_MINUTES
    timezone: str = constants.DEFAULT_TIMEZONE

    @property
    def start_minutes(self) -> int:
        return parse_hhmm(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_hhmm(self.end)

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes < self.start_minutes

    @property
    def end_minutes_adjusted(self) -> int:
        """Shift end on the shift-adjusted minute axis."""
        end = self.end_minutes
        return end + MINUTES_PER_DAY if self.is_overnight else end

    @property
    def duration_hours(self) -> float:
        return max(0, self.end_minutes_adjusted - self.start_minutes) / 60

    @classmethod
    def from_settings(cls, settings: Any) -> "ShiftConfig":
        return cls(
            start=str(getattr(settings, "SHIFT_START", constants.DEFAULT_SHIFT_START)),
            end=str(getattr(settings, "SHIFT_END", constants.DEFAULT_SHIFT_END)),
            grace_period_minutes=int(getattr(settings, "GRACE_PERIOD_MINS", constants.DEFAULT_GRACE_PERIOD_MINUTES)),
            early_checkout_relaxation_minutes=int(
                getattr(settings, "CHECKOUT_EARLY_RELAXATION_MINS", constants.DEFAULT_EARLY_CHECKOUT_RELAXATION_MINUTES)
            ),
            timezone=str(getattr(settings, "BUSINESS_TIMEZONE", constants.DEFAULT_TIMEZONE)),
        )


def normalize_employee_id(value: Any) -> str:
    """Canonical employee id: upper-case, no whitespace, exactly one ``BS-`` prefix."""
    cleaned = "".join(str(value or "").upper().split())
    if cleaned.startswith(constants.EMPLOYEE_ID_PREFIX):
        cleaned = cleaned[len(constants.EMPLOYEE_ID_PREFIX):]
    return f"{constants.EMPLOYEE_ID_PREFIX}{cleaned}"


@dataclass(frozen=True)
class FridayExemption:
    """Employees allowed to arrive until ``cutoff`` on Fridays without being late."""

    employee_ids: FrozenSet[str] = field(default_factory=frozenset)
    cutoff: str = constants.DEFAULT_FRIDAY_EXEMPT_CUTOFF

    @classmethod
    def of(cls, employee_ids: Iterable[str], cutoff: str = constants.DEFAULT_FRIDAY_EXEMPT_CUTOFF) -> "FridayExemption":
        return cls(employee_ids=frozenset(normalize_employee_id(e) for e in employee_ids if e), cutoff=cutoff)

    @classmethod
    def from_settings(cls, settings: Any) -> "FridayExemption":
        return cls.of(
            getattr(settings, "FRIDAY_LATE_EXEMPT_EMPLOYEE_IDS", ()) or (),
            str(getattr(settings, "FRIDAY_LATE_EXEMPT_CUTOFF", constants.DEFAULT_FRIDAY_EXEMPT_CUTOFF)),
        )

    def covers(self, employee_id: str | None) -> bool:
        if not employee_id or not employee_id.strip():
            return False
        return normalize_employee_id(employee_id) in self.employee_ids
