from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance history as one collection, read and replaced as a whole."""

    def list_all(self) -> list[AttendanceRecord]:
        raise NotImplementedError

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError
