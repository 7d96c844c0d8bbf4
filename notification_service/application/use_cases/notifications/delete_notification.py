"""Use case for deleting a notification."""

from sqlalchemy.orm import Session

from notification_service.application.errors import ForbiddenError, NotFoundError
from notification_service.domain.entities import Principal
from notification_service.infrastructure.repositories import NotificationRepository


def delete_notification(
    session: Session, *, notification_id: int, requester: Principal
) -> None:
    """Remove the notification permanently."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if not requester.can_manage(notification.user_id):
        raise ForbiddenError("Not authorized to delete this notification")
    repository.delete(notification_id)
