from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import PROFILES_KEY, USERS_KEY
from ..database.store import KeyedStore
from .model import EmployeeProfile, User
from .repository import UserRepository


class StoreUserRepository(UserRepository):
    def __init__(self, store: KeyedStore):
        self._store = store

    def list_all(self) -> list[User]:
        return [User.from_dict(row) for row in self._store.load(USERS_KEY)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_all() if u.id == user_id), None)

    def save_all(self, users: Sequence[User]) -> None:
        self._store.save(USERS_KEY, [u.to_dict() for u in users])

    def list_profiles(self) -> list[EmployeeProfile]:
        return [EmployeeProfile.from_dict(row) for row in self._store.load(PROFILES_KEY)]

    def save_profiles(self, profiles: Sequence[EmployeeProfile]) -> None:
        self._store.save(PROFILES_KEY, [p.to_dict() for p in profiles])
