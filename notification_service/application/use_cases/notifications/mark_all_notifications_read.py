"""Use case for clearing a user's unread notifications."""

from sqlalchemy.orm import Session

from notification_service.application.errors import ForbiddenError
from notification_service.domain.entities import Principal
from notification_service.infrastructure.repositories import NotificationRepository


def mark_all_notifications_read(
    session: Session, *, user_id: str, requester: Principal
) -> int:
    """Mark every unread notification of ``user_id`` as read.

    Returns the number of notifications that changed.
    """

    if not requester.can_manage(user_id):
        raise ForbiddenError("Not authorized to update these notifications")
    return NotificationRepository(session).mark_all_read(user_id)
