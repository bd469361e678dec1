from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_instant, parse_instant
from ..common.validators import clean_text


@dataclass(frozen=True)
class Notification:
    """User-facing notice.

    ``id`` is a deterministic semantic key (e.g. ``profile-incomplete:<userId>``)
    so regenerating the same fact lands on the same entry.
    """

    id: str
    user_id: str
    title: str
    message: str
    created_at: Optional[datetime] = None
    read: bool = False
    auto_generated: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        return cls(
            id=clean_text(data.get("id")),
            user_id=clean_text(data.get("userId")),
            title=clean_text(data.get("title")),
            message=clean_text(data.get("message")),
            created_at=parse_instant(data.get("createdAt")),
            read=bool(data.get("read", False)),
            auto_generated=bool(data.get("autoGenerated", False)),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "message": self.message,
            "createdAt": format_instant(self.created_at),
            "read": self.read,
            "autoGenerated": self.auto_generated,
        }
        return {k: v for k, v in data.items() if v is not None}
