from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import Role, WfhStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..notifications.model import Notification
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import WorkFromHomeRequest
from .repository import WfhRepository
from .service import LEAVE_DECIDERS

logger = logging.getLogger(__name__)


class WfhService:
    """Work-from-home requests: submitted by staff, decided by the CEO."""

    def __init__(self, requests: WfhRepository, users: UserRepository, notifications: NotificationService):
        self._requests = requests
        self._users = users
        self._notifications = notifications

    def create_request(
        self,
        *,
        user_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> WorkFromHomeRequest:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")
        reason = require_non_empty(reason, "Reason")
        if end_date < start_date:
            start_date, end_date = end_date, start_date

        now = now or now_utc()
        request = WorkFromHomeRequest(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=WfhStatus.PENDING,
            submitted_at=now,
        )
        self._requests.save_all([*self._requests.list_all(), request])

        for ceo in (u for u in self._users.list_all() if u.role == Role.CEO):
            self._notifications.notify(
                Notification(
                    id=f"wfh-request:{request.id}:{ceo.id}",
                    user_id=ceo.id,
                    title="New WFH request",
                    message=f"{user.name} requested to work from home from {start_date.isoformat()} to {end_date.isoformat()}.",
                    created_at=now,
                ),
                force_unread=True,
            )
        logger.info("WFH request %s submitted by %s", request.id, user.id)
        return request

    def _decide(self, *, current_role: Role, request_id: str, status: WfhStatus, now: Optional[datetime]) -> WorkFromHomeRequest:
        if current_role not in LEAVE_DECIDERS:
            raise AuthorizationError("Only the CEO can approve or reject WFH requests")

        requests = self._requests.list_all()
        request = next((r for r in requests if r.id == request_id), None)
        if not request:
            raise ValidationError("WFH request not found")
        if request.status != WfhStatus.PENDING:
            raise ValidationError("WFH request has already been processed")

        decided = replace(request, status=status)
        self._requests.save_all([decided if r.id == request_id else r for r in requests])
        self._notifications.notify(
            Notification(
                id=f"wfh-status:{request.id}",
                user_id=request.user_id,
                title=f"WFH {status.value}",
                message=(
                    f"Your WFH request from {request.start_date.isoformat() if request.start_date else '-'} "
                    f"to {request.end_date.isoformat() if request.end_date else '-'} was {status.value.lower()}."
                ),
                created_at=now or now_utc(),
            ),
            force_unread=True,
        )
        logger.info("WFH request %s %s", request.id, status.value.lower())
        return decided

    def approve_request(self, *, current_role: Role, request_id: str, now: Optional[datetime] = None) -> WorkFromHomeRequest:
        return self._decide(current_role=current_role, request_id=request_id, status=WfhStatus.APPROVED, now=now)

    def reject_request(self, *, current_role: Role, request_id: str, now: Optional[datetime] = None) -> WorkFromHomeRequest:
        return self._decide(current_role=current_role, request_id=request_id, status=WfhStatus.REJECTED, now=now)

    def list_for_user(self, *, user_id: str) -> list[WorkFromHomeRequest]:
        return [r for r in self._requests.list_all() if r.user_id == user_id]

    def list_pending(self) -> list[WorkFromHomeRequest]:
        return [r for r in self._requests.list_all() if r.status == WfhStatus.PENDING]
