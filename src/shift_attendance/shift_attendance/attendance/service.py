from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import ValidationError
from ..payroll.hours import (
    compute_overtime_hours,
    compute_total_hours,
    live_overtime_hours,
    live_total_hours,
    stored_overtime,
)
from ..shifts.clock import resolve_shift_day, to_local
from ..shifts.model import FridayExemption, ShiftConfig
from ..users.repository import UserRepository
from .classifier import classify_check_out, decide_check_in
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        config: ShiftConfig,
        *,
        exemption: Optional[FridayExemption] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._config = config
        self._exemption = exemption

    def check_in(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_utc()
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")

        records = self._attendance.list_all()
        if any(r.user_id == user_id and r.is_open for r in records):
            raise ValidationError("You are already checked in")

        day = resolve_shift_day(now, self._config)
        if any(r.user_id == user_id and r.date == day for r in records):
            raise ValidationError("You have already completed this shift")

        decision = decide_check_in(
            now,
            self._config,
            employee_id=user.employee_id,
            work_mode=user.work_mode,
            exemption=self._exemption,
        )
        record = AttendanceRecord(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            date=day,
            check_in=now,
            status=decision.check_in,
        )
        self._attendance.save_all([*records, record])
        logger.info("Check-in %s for %s on shift day %s (%s)", record.id, user.id, day, record.status.value)
        return record

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_utc()
        records = self._attendance.list_all()
        active = next((r for r in reversed(records) if r.user_id == user_id and r.is_open), None)
        if not active:
            raise ValidationError("You have not checked in yet")
        if now < active.check_in:
            raise ValidationError("Check-out cannot be before check-in")

        closed = replace(
            active,
            check_out=now,
            total_hours=compute_total_hours(active.check_in, now, self._config),
            overtime_hours=stored_overtime(compute_overtime_hours(active.check_in, now, self._config)),
        )
        self._attendance.save_all([closed if r.id == active.id else r for r in records])
        logger.info("Check-out %s for %s (%.2fh)", closed.id, user_id, closed.total_hours)
        return closed

    def correct_record(
        self,
        record_id: str,
        *,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Administrative correction; cached hours are repaired by the next sweep."""
        records = self._attendance.list_all()
        target = next((r for r in records if r.id == record_id), None)
        if not target:
            raise ValidationError("Attendance record not found")

        new_check_in = check_in or target.check_in
        new_check_out = check_out or target.check_out
        if new_check_in and new_check_out and new_check_out < new_check_in:
            raise ValidationError("Check-out cannot be before check-in")

        day = target.date
        if check_in is not None:
            day = resolve_shift_day(new_check_in, self._config)
            if any(r.id != record_id and r.user_id == target.user_id and r.date == day for r in records):
                raise ValidationError("Another record already exists for this shift day")

        updated = replace(target, date=day, check_in=new_check_in, check_out=new_check_out)
        self._attendance.save_all([updated if r.id == record_id else r for r in records])
        if day != target.date:
            logger.info("Correction moved attendance %s from shift day %s to %s", record_id, target.date, day)
        return updated

    def get_active_record(self, user_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in reversed(self._attendance.list_all()) if r.user_id == user_id and r.is_open), None)

    def get_history_ui(self, user_id: str, *, limit: int = 30) -> list[dict]:
        rows = [r for r in self._attendance.list_all() if r.user_id == user_id]
        rows.sort(key=lambda r: (r.date, r.check_in.isoformat() if r.check_in else ""), reverse=True)
        return [self._to_ui(r) for r in rows[:limit]]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "id": r.id,
            "date": r.date,
            "check_in": to_local(r.check_in, self._config).strftime("%H:%M") if r.check_in else "-",
            "check_out": to_local(r.check_out, self._config).strftime("%H:%M") if r.check_out else "Active",
            "check_in_status": r.status.value if r.status else "-",
            "check_out_status": classify_check_out(r.check_out, self._config).value,
            "total_hours": round(live_total_hours(r.check_in, r.check_out, r.total_hours, self._config), 2),
            "overtime_hours": round(live_overtime_hours(r.check_in, r.check_out, r.overtime_hours, self._config), 2),
        }
