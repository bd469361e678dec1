from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..users.model import EmployeeProfile, User
from .engine import for_user, mark_all_read, mark_read, regenerate_auto_notifications, unread_count, upsert_notification
from .model import Notification
from .profile import build_profile_notifications
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(self, notification: Notification, *, force_unread: bool = False) -> None:
        current = self._notifications.list_all()
        self._notifications.save_all(upsert_notification(current, notification, force_unread))

    def list_for_user(self, user_id: str) -> dict:
        items = self._notifications.list_all()
        mine = for_user(items, user_id)
        return {"items": [n.to_dict() for n in mine], "unread": unread_count(items, user_id)}

    def mark_read(self, notification_id: str) -> None:
        self._notifications.save_all(mark_read(self._notifications.list_all(), notification_id))

    def mark_all_read(self, user_id: str) -> None:
        self._notifications.save_all(mark_all_read(self._notifications.list_all(), user_id))

    def refresh_profile_notices(
        self,
        users: Sequence[User],
        profiles: Sequence[EmployeeProfile],
        *,
        now: Optional[datetime] = None,
    ) -> int:
        """Regenerate the auto-generated notice set; returns how many are active."""
        if not users:
            return 0
        generated = build_profile_notifications(users, profiles, now=now or now_utc())
        updated = regenerate_auto_notifications(self._notifications.list_all(), generated)
        self._notifications.save_all(updated)
        logger.debug("Regenerated %d profile notices", len(generated))
        return len(generated)
