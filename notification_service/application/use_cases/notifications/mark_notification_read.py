"""Use case for marking a single notification as read."""

from sqlalchemy.orm import Session

from notification_service.application.errors import ForbiddenError, NotFoundError
from notification_service.domain.entities import Notification, Principal
from notification_service.infrastructure.repositories import NotificationRepository


def mark_notification_read(
    session: Session, *, notification_id: int, requester: Principal
) -> Notification:
    """Set ``is_read`` on the notification. Repeated calls succeed."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if not requester.can_manage(notification.user_id):
        raise ForbiddenError("Not authorized to access this notification")
    if notification.is_read:
        return notification
    return repository.mark_read(notification_id)
