"""Idempotent sweeps that keep stored attendance consistent.

Each sweep is a pure ``(records, ...) -> ReconcileResult`` and converges: a
second run over its own output reports ``changed=False``. A malformed batch
raises before any record is produced, so callers never persist half a sweep.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Collection, Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.validators import finite_or_none
from ..core.constants import (
    AUTO_ABSENCE_ID_PREFIX,
    DEFAULT_WORKING_DAYS,
    EMPLOYEE_ID_PREFIX,
    HOURS_TOLERANCE,
    WEEKDAY_LABELS,
)
from ..core.enums import LeaveStatus, Role, WfhStatus
from ..core.exceptions import ValidationError
from ..payroll.calculator.standard_calculator import month_key
from ..payroll.hours import compute_overtime_hours, compute_total_hours, stored_overtime
from ..requests.model import LeaveRequest, WorkFromHomeRequest
from ..shifts.clock import resolve_shift_day, shift_day, shift_end_instant
from ..shifts.model import ShiftConfig, normalize_employee_id
from ..users.model import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    records: list
    changed: bool


def _require_items(items: Iterable, item_type: type, label: str) -> list:
    if items is None or isinstance(items, (str, bytes, dict)):
        raise ValidationError(f"{label.capitalize()} batch must be a list")
    out = list(items)
    for item in out:
        if not isinstance(item, item_type):
            raise ValidationError(f"Unexpected item in {label} batch: {type(item).__name__}")
    return out


def _require_records(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    return _require_items(records, AttendanceRecord, "attendance")


def _differs(cached: Optional[float], computed: Optional[float]) -> bool:
    cached = finite_or_none(cached)
    # None ("no overtime") and 0.0 are different cache states.
    if (cached is None) != (computed is None):
        return True
    return abs((computed or 0.0) - (cached or 0.0)) > HOURS_TOLERANCE


def refresh_derived_fields(record: AttendanceRecord, config: ShiftConfig) -> AttendanceRecord:
    """Return ``record`` with total/overtime hours recomputed when they drifted."""
    if record.check_in is None or record.check_out is None:
        return record
    total = compute_total_hours(record.check_in, record.check_out, config)
    overtime = stored_overtime(compute_overtime_hours(record.check_in, record.check_out, config))
    if _differs(record.overtime_hours, overtime) or _differs(record.total_hours, total):
        return replace(record, total_hours=total, overtime_hours=overtime)
    return record


def reconcile_overtime(records: Sequence[AttendanceRecord], config: ShiftConfig) -> ReconcileResult:
    items = _require_records(records)
    refreshed = [refresh_derived_fields(r, config) for r in items]
    updated = sum(1 for before, after in zip(items, refreshed) if before is not after)
    if updated:
        logger.info("Refreshed derived hours on %d of %d attendance records", updated, len(items))
    return ReconcileResult(records=refreshed, changed=updated > 0)


def _normalize_name(value: Optional[str]) -> str:
    return " ".join((value or "").split()).lower()


def resolve_owner(record: AttendanceRecord, users: Sequence[User]) -> Optional[User]:
    """Find the current user a record belongs to (id, legacy employee id, then name)."""
    for user in users:
        if user.id == record.user_id:
            return user

    legacy_id = normalize_employee_id(record.user_id)
    if legacy_id != EMPLOYEE_ID_PREFIX:
        for user in users:
            if user.employee_id and normalize_employee_id(user.employee_id) == legacy_id:
                return user

    name = _normalize_name(record.user_name)
    if name:
        for user in users:
            if _normalize_name(user.name) == name:
                return user
    return None


def reconcile_user_ids(records: Sequence[AttendanceRecord], users: Sequence[User]) -> ReconcileResult:
    items = _require_records(records)
    roster = list(users or [])
    if not roster:
        return ReconcileResult(records=items, changed=False)

    known_ids = {u.id for u in roster}
    relinked = 0
    out: list[AttendanceRecord] = []
    for record in items:
        if record.user_id in known_ids:
            out.append(record)
            continue
        owner = resolve_owner(record, roster)
        if owner is None:
            logger.debug("No roster match for attendance %s (userId=%r)", record.id, record.user_id)
            out.append(record)
            continue
        relinked += 1
        out.append(replace(record, user_id=owner.id, user_name=owner.name or record.user_name))

    if relinked:
        logger.info("Re-linked %d attendance records to current users", relinked)
    return ReconcileResult(records=out, changed=relinked > 0)


def _is_auto_checkout_exempt(record: AttendanceRecord, users: Sequence[User], exempt_roles: Collection[Role]) -> bool:
    if not exempt_roles:
        return False
    owner = resolve_owner(record, users) if users else None
    # Unknown owners are left alone.
    if owner is None or owner.role is None:
        return True
    return owner.role in exempt_roles


def auto_checkout_stale_records(
    records: Sequence[AttendanceRecord],
    users: Sequence[User],
    config: ShiftConfig,
    *,
    now: datetime,
    exempt_roles: Collection[Role] = (),
) -> ReconcileResult:
    """Close open records left behind from a past shift, or superseded by a newer one.

    The check-out is set to the configured shift end of the record's shift day.
    """
    items = _require_records(records)
    roster = list(users or [])
    current_day = resolve_shift_day(now, config)

    candidates = [r for r in items if r.is_open and not _is_auto_checkout_exempt(r, roster, exempt_roles)]
    latest_open: dict[str, AttendanceRecord] = {}
    for record in candidates:
        key = record.user_id or record.user_name or record.id
        existing = latest_open.get(key)
        if existing is None or record.check_in > existing.check_in:
            latest_open[key] = record

    closed: dict[str, AttendanceRecord] = {}
    for record in candidates:
        key = record.user_id or record.user_name or record.id
        record_day = shift_day(record.check_in, config)
        superseded = latest_open[key].id != record.id
        stale = record_day.isoformat() < current_day
        if not superseded and not stale:
            continue
        check_out = shift_end_instant(record_day, config)
        closed[record.id] = replace(
            record,
            check_out=check_out,
            total_hours=compute_total_hours(record.check_in, check_out, config),
            overtime_hours=stored_overtime(compute_overtime_hours(record.check_in, check_out, config)),
        )

    if closed:
        logger.info("Auto checked out %d stale attendance records", len(closed))
    out = [closed.get(r.id, r) if r.is_open else r for r in items]
    return ReconcileResult(records=out, changed=bool(closed))


def auto_absence_id(user_id: str, day: date) -> str:
    return f"{AUTO_ABSENCE_ID_PREFIX}{user_id}:{day.isoformat()}"


def _is_absence_exempt(
    user: User,
    day: date,
    records: Sequence[AttendanceRecord],
    leaves: Sequence[LeaveRequest],
    wfh_requests: Sequence[WorkFromHomeRequest],
) -> bool:
    if any(r.user_id == user.id and r.date == day.isoformat() for r in records):
        return True
    if any(l.user_id == user.id and l.status != LeaveStatus.CANCELLED and l.covers(day) for l in leaves):
        return True
    return any(w.user_id == user.id and w.status == WfhStatus.APPROVED and w.covers(day) for w in wfh_requests)


def auto_mark_absences(
    leaves: Sequence[LeaveRequest],
    records: Sequence[AttendanceRecord],
    users: Sequence[User],
    wfh_requests: Sequence[WorkFromHomeRequest],
    target_date: date,
    *,
    working_days: Collection[str] = DEFAULT_WORKING_DAYS,
    allowance: int = 0,
    now: Optional[datetime] = None,
) -> ReconcileResult:
    """Add an approved ``auto-absence:<uid>:<date>`` leave for each employee with
    nothing on file for ``target_date``.

    The result carries the leave list. Only the first ``allowance`` absences of a
    month are paid. Superadmins and non-working days are skipped.
    """
    items = _require_items(leaves, LeaveRequest, "leave")
    attendance = _require_records(records)
    remote = _require_items(wfh_requests or [], WorkFromHomeRequest, "WFH request")
    if WEEKDAY_LABELS[target_date.weekday()] not in set(working_days):
        return ReconcileResult(records=items, changed=False)

    existing_ids = {l.id for l in items}
    key = month_key(target_date)
    added: list[LeaveRequest] = []
    for user in users or []:
        if user.role == Role.SUPERADMIN or auto_absence_id(user.id, target_date) in existing_ids:
            continue
        if _is_absence_exempt(user, target_date, attendance, items, remote):
            continue
        used = sum(
            1
            for l in items
            if l.user_id == user.id and l.is_auto_absence and l.start_date and month_key(l.start_date) == key
        )
        added.append(
            LeaveRequest(
                id=auto_absence_id(user.id, target_date),
                user_id=user.id,
                user_name=user.name,
                start_date=target_date,
                end_date=target_date,
                reason="Auto marked absence",
                status=LeaveStatus.APPROVED,
                is_paid=used < allowance,
                submitted_at=now,
            )
        )

    if added:
        logger.info("Marked %d employees absent on %s", len(added), target_date.isoformat())
    return ReconcileResult(records=[*items, *added], changed=bool(added))
