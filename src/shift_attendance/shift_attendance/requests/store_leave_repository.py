from __future__ import annotations

from typing import Sequence

from ..core.constants import LEAVES_KEY
from ..database.store import KeyedStore
from .model import LeaveRequest
from .repository import LeaveRepository


class StoreLeaveRepository(LeaveRepository):
    def __init__(self, store: KeyedStore):
        self._store = store

    def list_all(self) -> list[LeaveRequest]:
        return [LeaveRequest.from_dict(row) for row in self._store.load(LEAVES_KEY)]

    def save_all(self, leaves: Sequence[LeaveRequest]) -> None:
        self._store.save(LEAVES_KEY, [leave.to_dict() for leave in leaves])
