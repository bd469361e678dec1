from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

import pytz

logger = logging.getLogger(__name__)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_date_or_none(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip()[:10])
    except ValueError:
        return None


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM month key into (year, month)."""
    parsed = datetime.strptime(str(value).strip()[:7], "%Y-%m")
    return parsed.year, parsed.month


def ensure_aware(instant: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=pytz.UTC)
    return instant


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 instant, returning None for anything unparseable.

    Stored history must stay renderable even when one timestamp is corrupt,
    so this never raises.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_aware(datetime.fromisoformat(text))
    except ValueError:
        logger.warning("Unparseable instant %r ignored", value)
        return None


def format_instant(instant: Optional[datetime]) -> Optional[str]:
    if instant is None:
        return None
    return ensure_aware(instant).isoformat()


def parse_hhmm(value: Any) -> int:
    """Parse "HH:MM" into minutes of day; malformed values fall back to 0."""
    try:
        hours, minutes = str(value).strip().split(":")[:2]
        total = int(hours) * 60 + int(minutes)
    except (TypeError, ValueError):
        logger.warning("Malformed HH:MM value %r, using 00:00", value)
        return 0
    if not 0 <= total < 24 * 60:
        logger.warning("Out of range HH:MM value %r, using 00:00", value)
        return 0
    return total


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)
