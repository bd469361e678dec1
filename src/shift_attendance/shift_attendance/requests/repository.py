from __future__ import annotations

from typing import Protocol, Sequence

from .model import LeaveRequest, WorkFromHomeRequest


class LeaveRepository(Protocol):
    def list_all(self) -> list[LeaveRequest]:
        raise NotImplementedError

    def save_all(self, leaves: Sequence[LeaveRequest]) -> None:
        raise NotImplementedError


class WfhRepository(Protocol):
    def list_all(self) -> list[WorkFromHomeRequest]:
        raise NotImplementedError

    def save_all(self, requests: Sequence[WorkFromHomeRequest]) -> None:
        raise NotImplementedError
