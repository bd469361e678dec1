from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile, User


class UserRepository(Protocol):
    """Roster provider.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def list_all(self) -> list[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def save_all(self, users: Sequence[User]) -> None:
        raise NotImplementedError

    def list_profiles(self) -> list[EmployeeProfile]:
        raise NotImplementedError

    def save_profiles(self, profiles: Sequence[EmployeeProfile]) -> None:
        raise NotImplementedError
