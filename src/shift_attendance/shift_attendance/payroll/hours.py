"""Per-record hour arithmetic shared by payroll, reports and reconciliation."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import ensure_aware
from ..common.validators import finite_or_zero
from ..core.constants import MAX_SANE_SHIFT_HOURS, MINUTES_PER_DAY
from ..shifts.clock import checkout_adjusted_minutes, shift_adjusted_minutes
from ..shifts.model import ShiftConfig


def compute_total_hours(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    config: Optional[ShiftConfig] = None,
) -> float:
    """Worked hours between check-in and check-out.

    Real elapsed time is used when it is a sane single shift (0-18 h).
    Otherwise the shift-adjusted minute axis is used so clock skew or DST
    anomalies never yield negative or multi-day totals.
    """
    if check_in is None or check_out is None:
        return 0.0
    check_in, check_out = ensure_aware(check_in), ensure_aware(check_out)
    elapsed = (check_out - check_in).total_seconds() / 3600
    if 0 <= elapsed <= MAX_SANE_SHIFT_HOURS:
        return elapsed

    if config is not None:
        start = shift_adjusted_minutes(check_in, config)
        end = shift_adjusted_minutes(check_out, config)
    else:
        start = check_in.hour * 60 + check_in.minute
        end = check_out.hour * 60 + check_out.minute
    if end < start:
        end += MINUTES_PER_DAY
    return max(0, end - start) / 60


def compute_overtime_minutes(check_in: Optional[datetime], check_out: Optional[datetime], config: ShiftConfig) -> int:
    if check_in is None or check_out is None:
        return 0
    early = max(0, config.start_minutes - shift_adjusted_minutes(check_in, config))
    late = max(0, checkout_adjusted_minutes(check_out, config) - config.end_minutes_adjusted)
    return early + late


def compute_overtime_hours(check_in: Optional[datetime], check_out: Optional[datetime], config: ShiftConfig) -> float:
    return compute_overtime_minutes(check_in, check_out, config) / 60


def stored_overtime(hours: float) -> Optional[float]:
    """Overtime as cached on a record: None means "none", not "not computed"."""
    return hours if hours > 0 else None


def live_total_hours(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    cached: Optional[float],
    config: ShiftConfig,
) -> float:
    """Total hours for display: recomputed for closed pairs, cached value otherwise."""
    if check_in is not None and check_out is not None:
        return compute_total_hours(check_in, check_out, config)
    return finite_or_zero(cached)


def live_overtime_hours(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    cached: Optional[float],
    config: ShiftConfig,
) -> float:
    if check_in is not None and check_out is not None:
        return compute_overtime_hours(check_in, check_out, config)
    return finite_or_zero(cached)
