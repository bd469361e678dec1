from __future__ import annotations

from typing import Protocol, Sequence

from ..core.constants import NOTIFICATIONS_KEY
from ..database.store import KeyedStore
from .model import Notification


class NotificationRepository(Protocol):
    def list_all(self) -> list[Notification]:
        raise NotImplementedError

    def save_all(self, notifications: Sequence[Notification]) -> None:
        raise NotImplementedError


class StoreNotificationRepository(NotificationRepository):
    def __init__(self, store: KeyedStore):
        self._store = store

    def list_all(self) -> list[Notification]:
        return [Notification.from_dict(row) for row in self._store.load(NOTIFICATIONS_KEY)]

    def save_all(self, notifications: Sequence[Notification]) -> None:
        self._store.save(NOTIFICATIONS_KEY, [n.to_dict() for n in notifications])
