from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..notifications.model import Notification
from ..notifications.service import NotificationService
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

LEAVE_DECIDERS = frozenset({Role.CEO, Role.SUPERADMIN})


class RequestService:
    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        calculator: Optional[StandardPayrollCalculator] = None,
    ):
        self._leaves = leaves
        self._users = users
        self._notifications = notifications
        self._calculator = calculator or StandardPayrollCalculator()

    def _get_leave(self, leave_id: str) -> tuple[list[LeaveRequest], LeaveRequest]:
        leaves = self._leaves.list_all()
        leave = next((l for l in leaves if l.id == leave_id), None)
        if not leave:
            raise ValidationError("Leave request not found")
        return leaves, leave

    def create_leave(
        self,
        *,
        user_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")
        reason = require_non_empty(reason, "Reason")
        if end_date < start_date:
            start_date, end_date = end_date, start_date

        now = now or now_utc()
        leaves = self._leaves.list_all()
        leave = LeaveRequest(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            is_paid=self._calculator.paid_leave_allowed(user.id, leaves, start_date),
            submitted_at=now,
        )
        self._leaves.save_all([*leaves, leave])

        for ceo in (u for u in self._users.list_all() if u.role == Role.CEO):
            self._notifications.notify(
                Notification(
                    id=f"leave-request:{leave.id}:{ceo.id}",
                    user_id=ceo.id,
                    title="New leave request",
                    message=f"{user.name} requested leave from {start_date.isoformat()} to {end_date.isoformat()}.",
                    created_at=now,
                ),
                force_unread=True,
            )
        logger.info("Leave %s submitted by %s (paid=%s)", leave.id, user.id, leave.is_paid)
        return leave

    def _decide(self, *, current_role: Role, leave_id: str, status: LeaveStatus, now: Optional[datetime]) -> LeaveRequest:
        if current_role not in LEAVE_DECIDERS:
            raise AuthorizationError("Only the CEO can approve or reject leave")

        leaves, leave = self._get_leave(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        decided = replace(leave, status=status)
        self._leaves.save_all([decided if l.id == leave_id else l for l in leaves])
        self._notifications.notify(
            Notification(
                id=f"leave-status:{leave.id}",
                user_id=leave.user_id,
                title=f"Leave {status.value.lower()}",
                message=(
                    f"Your leave from {leave.start_date.isoformat() if leave.start_date else '-'} "
                    f"to {leave.end_date.isoformat() if leave.end_date else '-'} was {status.value.lower()}."
                ),
                created_at=now or now_utc(),
            ),
            force_unread=True,
        )
        logger.info("Leave %s %s", leave.id, status.value.lower())
        return decided

    def approve_leave(self, *, current_role: Role, leave_id: str, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(current_role=current_role, leave_id=leave_id, status=LeaveStatus.APPROVED, now=now)

    def reject_leave(self, *, current_role: Role, leave_id: str, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(current_role=current_role, leave_id=leave_id, status=LeaveStatus.REJECTED, now=now)

    def cancel_leave(self, *, user_id: str, leave_id: str) -> LeaveRequest:
        leaves, leave = self._get_leave(leave_id)
        if leave.user_id != user_id:
            raise AuthorizationError("You can only cancel your own leave")
        if leave.status == LeaveStatus.CANCELLED:
            raise ValidationError("Leave request is already cancelled")

        cancelled = replace(leave, status=LeaveStatus.CANCELLED)
        self._leaves.save_all([cancelled if l.id == leave_id else l for l in leaves])
        return cancelled

    def list_for_user(self, *, user_id: str) -> list[LeaveRequest]:
        return [l for l in self._leaves.list_all() if l.user_id == user_id]

    def list_pending(self) -> list[LeaveRequest]:
        return [l for l in self._leaves.list_all() if l.status == LeaveStatus.PENDING]
