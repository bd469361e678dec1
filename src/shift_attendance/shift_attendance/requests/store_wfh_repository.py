from __future__ import annotations

from typing import Sequence

from ..core.constants import WFH_KEY
from ..database.store import KeyedStore
from .model import WorkFromHomeRequest
from .repository import WfhRepository


class StoreWfhRepository(WfhRepository):
    def __init__(self, store: KeyedStore):
        self._store = store

    def list_all(self) -> list[WorkFromHomeRequest]:
        return [WorkFromHomeRequest.from_dict(row) for row in self._store.load(WFH_KEY)]

    def save_all(self, requests: Sequence[WorkFromHomeRequest]) -> None:
        self._store.save(WFH_KEY, [r.to_dict() for r in requests])
