"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from notification_service.domain.entities import Notification

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


class NotificationPublisher:
    """Serialize notifications and schedule their delivery to live sessions.

    Delivery is fire-and-forget: ``dispatch`` returns once the send has been
    scheduled on the event loop.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[int]] = set()

    @property
    def manager(self) -> NotificationConnectionManager:
        return self._manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user's group."""

        message = {"type": NOTIFICATION_EVENT, "data": serialize_notification(notification)}
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Called from a worker thread of the running app.
            from_thread.run_sync(self._spawn, notification.user_id, message)
        else:
            self._spawn(notification.user_id, message)

    def _spawn(self, user_id: str, message: dict[str, Any]) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._manager.send_to_user(user_id, message))
        self._pending.add(task)
        task.add_done_callback(self._on_sent)

    def _on_sent(self, task: "asyncio.Task[int]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Realtime notification push failed", exc_info=exc)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON payload representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "message": notification.message,
        "orderId": notification.order_id,
        "type": notification.type.value,
        "isRead": notification.is_read,
        "metadata": notification.metadata.to_payload(),
        "createdAt": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "updatedAt": notification.updated_at.isoformat()
        if notification.updated_at
        else None,
    }


__all__ = ["NOTIFICATION_EVENT", "NotificationPublisher", "serialize_notification"]
