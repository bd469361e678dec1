from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Collection, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_WORKING_DAYS
from ..core.enums import Role
from ..requests.repository import LeaveRepository, WfhRepository
from ..shifts.clock import shift_day
from ..shifts.model import ShiftConfig
from ..users.repository import UserRepository
from .engine import (
    ReconcileResult,
    auto_checkout_stale_records,
    auto_mark_absences,
    reconcile_overtime,
    reconcile_user_ids,
)

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Runs every sweep over one snapshot and persists at most once."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        config: ShiftConfig,
        *,
        auto_checkout_enabled: bool = False,
        auto_checkout_exempt_roles: Collection[Role] = (),
    ):
        self._attendance = attendance
        self._users = users
        self._config = config
        self._auto_checkout_enabled = auto_checkout_enabled
        self._exempt_roles = tuple(auto_checkout_exempt_roles)

    def run(self, *, now: Optional[datetime] = None) -> ReconcileResult:
        records = self._attendance.list_all()
        users = self._users.list_all()

        relinked = reconcile_user_ids(records, users)
        result = relinked
        if self._auto_checkout_enabled:
            closed = auto_checkout_stale_records(
                result.records, users, self._config, now=now or now_utc(), exempt_roles=self._exempt_roles
            )
            result = ReconcileResult(closed.records, result.changed or closed.changed)
        refreshed = reconcile_overtime(result.records, self._config)
        result = ReconcileResult(refreshed.records, result.changed or refreshed.changed)

        if result.changed:
            self._attendance.save_all(result.records)
            logger.info("Reconciliation persisted %d records", len(result.records))
        return result


class AbsenceService:
    """Marks employees absent for the last completed shift day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        leaves: LeaveRepository,
        wfh_requests: WfhRepository,
        config: ShiftConfig,
        *,
        working_days: Sequence[str] = DEFAULT_WORKING_DAYS,
        allowance: int = 0,
    ):
        self._attendance = attendance
        self._users = users
        self._leaves = leaves
        self._wfh = wfh_requests
        self._config = config
        self._working_days = tuple(working_days)
        self._allowance = max(0, int(allowance))

    def mark_absences(self, *, now: Optional[datetime] = None) -> ReconcileResult:
        now = now or now_utc()
        target = shift_day(now, self._config) - timedelta(days=1)
        result = auto_mark_absences(
            self._leaves.list_all(),
            self._attendance.list_all(),
            self._users.list_all(),
            self._wfh.list_all(),
            target,
            working_days=self._working_days,
            allowance=self._allowance,
            now=now,
        )
        if result.changed:
            self._leaves.save_all(result.records)
        return result
