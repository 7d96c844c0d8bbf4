"""Use cases for recording and managing notifications."""

from .delete_notification import delete_notification
from .list_user_notifications import NotificationInbox, list_user_notifications
from .mark_all_notifications_read import mark_all_notifications_read
from .mark_notification_read import mark_notification_read
from .messages import render_delivery_message, render_order_message
from .status_events import EMAIL_STATUSES, StatusEventGateway

__all__ = [
    "EMAIL_STATUSES",
    "NotificationInbox",
    "StatusEventGateway",
    "delete_notification",
    "list_user_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "render_delivery_message",
    "render_order_message",
]
