"""Shift clock: business-local time and the shift-adjusted minute axis.

All functions are pure in (instant, config). Overnight shifts are folded onto
one increasing axis by adding a day's worth of minutes to the early-morning
portion, so start/current/end compare with plain arithmetic.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytz

from ..common.datetime_utils import ensure_aware
from ..core.constants import MINUTES_PER_DAY
from .model import ShiftConfig


@dataclass(frozen=True)
class LocalParts:
    year: int
    month: int
    day: int
    hour: int
    minute: int

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)


def to_local(instant: datetime, config: ShiftConfig) -> datetime:
    return ensure_aware(instant).astimezone(pytz.timezone(config.timezone))


def local_parts(instant: datetime, config: ShiftConfig) -> LocalParts:
    local = to_local(instant, config)
    return LocalParts(local.year, local.month, local.day, local.hour, local.minute)


def local_minutes(instant: datetime, config: ShiftConfig) -> int:
    return local_parts(instant, config).minutes_of_day


def adjust_minutes(minutes: int, config: ShiftConfig) -> int:
    """Place a raw minutes-of-day value on the shift axis (before end => next day)."""
    if config.is_overnight and minutes < config.end_minutes:
        return minutes + MINUTES_PER_DAY
    return minutes


def shift_adjusted_minutes(instant: datetime, config: ShiftConfig) -> int:
    return adjust_minutes(local_minutes(instant, config), config)


def checkout_adjusted_minutes(instant: datetime, config: ShiftConfig) -> int:
    """Check-out minutes on the shift axis.

    Departures are measured against the shift end, so anything before the
    shift start of an overnight shift belongs to the morning after.
    """
    minutes = local_minutes(instant, config)
    if config.is_overnight and minutes < config.start_minutes:
        return minutes + MINUTES_PER_DAY
    return minutes


def shift_day(instant: datetime, config: ShiftConfig) -> date:
    parts = local_parts(instant, config)
    if config.is_overnight and parts.minutes_of_day < config.end_minutes:
        return parts.date - timedelta(days=1)
    return parts.date


def resolve_shift_day(instant: datetime, config: ShiftConfig) -> str:
    return shift_day(instant, config).isoformat()


def local_date_string(instant: datetime, config: ShiftConfig) -> str:
    return local_parts(instant, config).date.isoformat()


def shift_end_instant(day: date, config: ShiftConfig) -> datetime:
    """The instant a given shift day's shift ends, in UTC."""
    end_day = day + timedelta(days=1) if config.is_overnight else day
    minutes = config.end_minutes
    naive = datetime(end_day.year, end_day.month, end_day.day, minutes // 60, minutes % 60)
    return pytz.timezone(config.timezone).localize(naive).astimezone(pytz.UTC)


def week_start(instant: datetime, config: ShiftConfig) -> date:
    """Sunday of the business-local week containing ``instant``."""
    today = local_parts(instant, config).date
    return today - timedelta(days=(today.weekday() + 1) % 7)
