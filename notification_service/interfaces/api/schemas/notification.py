"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from notification_service.domain.entities import Notification, NotificationType

from .base import CamelModel


class DeliveryStatusUpdateRequest(CamelModel):
    """Body sent by the delivery flow when a courier changes a delivery."""

    user_id: str | None = None
    order_id: str | None = None
    status: str | None = None
    delivery_person_name: str | None = None
    email: str | None = Field(
        default=None, description="Customer address for the optional status email"
    )


class OrderStatusUpdateRequest(CamelModel):
    """Body sent by the restaurant flow when an order changes status."""

    user_id: str | None = None
    order_id: str | None = None
    status: str | None = None
    email: str | None = Field(default=None, description="Accepted for symmetry; unused")


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: str
    message: str
    order_id: str | None = None
    type: NotificationType
    is_read: bool
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            user_id=notification.user_id,
            message=notification.message,
            order_id=notification.order_id,
            type=notification.type,
            is_read=notification.is_read,
            metadata=notification.metadata.to_payload(),
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class NotificationResponse(CamelModel):
    success: bool = True
    data: NotificationRead


class NotificationListResponse(CamelModel):
    success: bool = True
    count: int
    unread_count: int
    data: list[NotificationRead]


class MarkAllReadResponse(CamelModel):
    success: bool = True
    count: int
    message: str


class EmptyResponse(CamelModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "DeliveryStatusUpdateRequest",
    "EmptyResponse",
    "MarkAllReadResponse",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
    "OrderStatusUpdateRequest",
]
