"""Realtime notification helpers for the infrastructure layer."""

from .manager import JsonSocket, NotificationConnectionManager
from .publisher import NOTIFICATION_EVENT, NotificationPublisher, serialize_notification

__all__ = [
    "JsonSocket",
    "NOTIFICATION_EVENT",
    "NotificationConnectionManager",
    "NotificationPublisher",
    "serialize_notification",
]
