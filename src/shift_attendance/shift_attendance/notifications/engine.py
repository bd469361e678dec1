"""Identity-keyed notification merging.

Manual notices (approvals, requests) are merged one at a time by id. Auto
notices (profile completeness) are regenerated wholesale from current state;
both passes keep the read flag a user already set unless a caller forces it.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .model import Notification


def _index(notifications: Iterable[Notification]) -> dict[str, Notification]:
    return {n.id: n for n in notifications}


def _merge(existing: Notification, incoming: Notification, *, force_unread: bool) -> Notification:
    return replace(
        incoming,
        created_at=existing.created_at or incoming.created_at,
        read=False if force_unread else existing.read,
    )


def upsert_notification(
    notifications: Sequence[Notification],
    notification: Notification,
    force_unread: bool = False,
) -> list[Notification]:
    by_id = _index(notifications)
    existing = by_id.get(notification.id)
    if existing is None:
        by_id[notification.id] = replace(notification, read=False)
    else:
        by_id[notification.id] = _merge(existing, notification, force_unread=force_unread)
    return list(by_id.values())


def regenerate_auto_notifications(
    notifications: Sequence[Notification],
    generated: Iterable[Notification],
) -> list[Notification]:
    """Replace the auto-generated set with ``generated``, keeping manual notices verbatim."""
    previous = _index(n for n in notifications if n.auto_generated)
    manual = [n for n in notifications if not n.auto_generated]

    auto: dict[str, Notification] = {}
    for notice in generated:
        notice = replace(notice, auto_generated=True)
        prior = previous.get(notice.id)
        auto[notice.id] = _merge(prior, notice, force_unread=False) if prior else replace(notice, read=False)

    manual_ids = {n.id for n in manual}
    return manual + [n for n in auto.values() if n.id not in manual_ids]


def mark_read(notifications: Sequence[Notification], notification_id: str) -> list[Notification]:
    return [replace(n, read=True) if n.id == notification_id else n for n in notifications]


def mark_all_read(notifications: Sequence[Notification], user_id: str) -> list[Notification]:
    return [replace(n, read=True) if n.user_id == user_id else n for n in notifications]


def unread_count(notifications: Iterable[Notification], user_id: str) -> int:
    return sum(1 for n in notifications if n.user_id == user_id and not n.read)


def for_user(notifications: Iterable[Notification], user_id: str) -> list[Notification]:
    return [n for n in notifications if n.user_id == user_id]
