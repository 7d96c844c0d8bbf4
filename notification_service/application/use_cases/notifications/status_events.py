"""Turn upstream status changes into stored, pushed and emailed notifications."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from notification_service.application.errors import ValidationError
from notification_service.domain.entities import (
    DeliveryStatus,
    DeliveryUpdateMetadata,
    Notification,
    NotificationType,
    OrderStatusMetadata,
)
from notification_service.infrastructure.repositories import NotificationRepository

from .messages import render_delivery_message, render_order_message

logger = logging.getLogger(__name__)

EMAIL_STATUSES = frozenset(
    {
        DeliveryStatus.ACCEPTED.value,
        DeliveryStatus.PICKED_UP.value,
        DeliveryStatus.DELIVERED.value,
    }
)


class NotificationFanout(Protocol):
    def dispatch(self, notification: Notification) -> None: ...


class StatusEmailSender(Protocol):
    def __call__(
        self,
        email: str,
        order_id: str,
        status: str,
        delivery_person_name: str | None = None,
    ) -> None: ...


Scheduler = Callable[..., Any]


def _run_now(func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    func(*args, **kwargs)


def _require_text(**fields: object) -> None:
    missing = [
        name
        for name, value in fields.items()
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class StatusEventGateway:
    """Record notifications for order and delivery status changes.

    The store write is the only step that can fail the call. The realtime
    push and the optional email run afterwards and their errors are logged,
    never raised.
    """

    def __init__(
        self,
        repository: NotificationRepository,
        fanout: NotificationFanout,
        send_status_email: StatusEmailSender,
        *,
        schedule: Scheduler = _run_now,
    ) -> None:
        self._repository = repository
        self._fanout = fanout
        self._send_status_email = send_status_email
        self._schedule = schedule

    def record_delivery_status_notification(
        self,
        user_id: str,
        order_id: str,
        status: str,
        delivery_person_name: str | None = None,
        email: str | None = None,
    ) -> Notification:
        _require_text(userId=user_id, orderId=order_id, status=status)
        delivery_person_name = delivery_person_name or None

        notification = self._store(
            Notification(
                id=None,
                user_id=user_id,
                order_id=order_id,
                message=render_delivery_message(order_id, status, delivery_person_name),
                type=NotificationType.DELIVERY_UPDATE,
                metadata=DeliveryUpdateMetadata(
                    delivery_status=status,
                    delivery_person_name=delivery_person_name,
                ),
            )
        )

        if email and status in EMAIL_STATUSES:
            self._schedule(
                self._email_quietly, email, order_id, status, delivery_person_name
            )
        return notification

    def record_order_status_notification(
        self, user_id: str, order_id: str, status: str
    ) -> Notification:
        _require_text(userId=user_id, orderId=order_id, status=status)

        return self._store(
            Notification(
                id=None,
                user_id=user_id,
                order_id=order_id,
                message=render_order_message(order_id, status),
                type=NotificationType.ORDER_STATUS,
                metadata=OrderStatusMetadata(order_status=status),
            )
        )

    def _store(self, notification: Notification) -> Notification:
        saved = self._repository.create(notification)
        logger.info(
            "Stored %s notification %s for user %s (order %s)",
            saved.type.value,
            saved.id,
            saved.user_id,
            saved.order_id,
        )
        self._push_quietly(saved)
        return saved

    def _push_quietly(self, notification: Notification) -> None:
        try:
            self._fanout.dispatch(notification)
        except Exception:
            logger.exception(
                "Realtime push failed for notification %s", notification.id
            )

    def _email_quietly(
        self,
        email: str,
        order_id: str,
        status: str,
        delivery_person_name: str | None,
    ) -> None:
        try:
            self._send_status_email(email, order_id, status, delivery_person_name)
        except Exception:
            logger.exception(
                "Status email for order %s (%s) could not be sent", order_id, status
            )


__all__ = [
    "EMAIL_STATUSES",
    "NotificationFanout",
    "StatusEmailSender",
    "StatusEventGateway",
]
