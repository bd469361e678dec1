from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from werkzeug.security import generate_password_hash

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import EmployeeProfile, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_HASH_PREFIXES = ("pbkdf2:", "scrypt:")


def _hash_password(value: Optional[str]) -> Optional[str]:
    if not value or value.startswith(_HASH_PREFIXES):
        return value
    return generate_password_hash(value)


class UserService:
    """Roster maintenance (create/update/delete users, self-service profiles)."""

    def __init__(self, users: UserRepository, attendance: AttendanceRepository):
        self._users = users
        self._attendance = attendance

    def list_users(self) -> list[User]:
        return self._users.list_all()

    def upsert_user(self, user: User) -> User:
        require_non_empty(user.id, "User id")
        require_non_empty(user.name, "Name")
        user = replace(user, password=_hash_password(user.password))

        users = self._users.list_all()
        if any(u.id == user.id for u in users):
            users = [user if u.id == user.id else u for u in users]
        else:
            users.append(user)
        self._users.save_all(users)
        return user

    def delete_user(self, user_id: str) -> int:
        """Remove a user and their attendance history; returns records removed."""
        users = self._users.list_all()
        if not any(u.id == user_id for u in users):
            raise ValidationError("Employee does not exist")
        self._users.save_all([u for u in users if u.id != user_id])

        records = self._attendance.list_all()
        kept = [r for r in records if r.user_id != user_id]
        self._attendance.save_all(kept)
        removed = len(records) - len(kept)
        logger.info("Deleted user %s and %d attendance records", user_id, removed)
        return removed

    def save_profile(self, profile: EmployeeProfile) -> EmployeeProfile:
        if not self._users.get_by_id(profile.user_id):
            raise ValidationError("Employee does not exist")
        profiles = [p for p in self._users.list_profiles() if p.user_id != profile.user_id]
        self._users.save_profiles([*profiles, profile])
        return profile
