"""Use case for reading a user's notification inbox."""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.orm import Session

from notification_service.application.errors import ForbiddenError
from notification_service.domain.entities import Notification, Principal
from notification_service.infrastructure.repositories import (
    DEFAULT_LIST_LIMIT,
    NotificationRepository,
)


@dataclass(frozen=True)
class NotificationInbox:
    notifications: Sequence[Notification]
    unread_count: int


def list_user_notifications(
    session: Session,
    *,
    user_id: str,
    requester: Principal,
    limit: int = DEFAULT_LIST_LIMIT,
) -> NotificationInbox:
    """Return the newest notifications of ``user_id`` and its unread count."""

    if not requester.can_manage(user_id):
        raise ForbiddenError("Not authorized to access these notifications")

    repository = NotificationRepository(session)
    return NotificationInbox(
        notifications=repository.list_for_user(user_id, limit=limit),
        unread_count=repository.count_unread(user_id),
    )
