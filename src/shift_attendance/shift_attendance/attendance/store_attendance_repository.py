from __future__ import annotations

from typing import Sequence

from ..core.constants import ATTENDANCE_KEY
from ..database.store import KeyedStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: KeyedStore):
        self._store = store

    def list_all(self) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_dict(row) for row in self._store.load(ATTENDANCE_KEY)]

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        self._store.save(ATTENDANCE_KEY, [r.to_dict() for r in records])
