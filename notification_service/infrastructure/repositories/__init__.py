"""Repository implementations for infrastructure layer."""

from .notification_repository import DEFAULT_LIST_LIMIT, NotificationRepository

__all__ = ["DEFAULT_LIST_LIMIT", "NotificationRepository"]
