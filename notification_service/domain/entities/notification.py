"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class NotificationType(str, Enum):
    """Closed set of notification categories."""

    ORDER_STATUS = "ORDER_STATUS"
    DELIVERY_UPDATE = "DELIVERY_UPDATE"
    SYSTEM = "SYSTEM"


@dataclass(frozen=True)
class DeliveryUpdateMetadata:
    """Payload attached to ``DELIVERY_UPDATE`` notifications."""

    delivery_status: str
    delivery_person_name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "deliveryStatus": self.delivery_status,
            "deliveryPersonName": self.delivery_person_name,
        }


@dataclass(frozen=True)
class OrderStatusMetadata:
    """Payload attached to ``ORDER_STATUS`` notifications."""

    order_status: str

    def to_payload(self) -> dict[str, Any]:
        return {"orderStatus": self.order_status}


@dataclass(frozen=True)
class SystemMetadata:
    """Free-form attributes attached to ``SYSTEM`` notifications."""

    attributes: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return dict(self.attributes)


NotificationMetadata = Union[DeliveryUpdateMetadata, OrderStatusMetadata, SystemMetadata]

_METADATA_TYPES: dict[NotificationType, type] = {
    NotificationType.DELIVERY_UPDATE: DeliveryUpdateMetadata,
    NotificationType.ORDER_STATUS: OrderStatusMetadata,
    NotificationType.SYSTEM: SystemMetadata,
}


def metadata_from_payload(
    notification_type: NotificationType, payload: dict[str, Any] | None
) -> NotificationMetadata:
    """Rebuild the metadata variant for ``notification_type`` from stored JSON."""

    payload = payload or {}
    if notification_type is NotificationType.DELIVERY_UPDATE:
        return DeliveryUpdateMetadata(
            delivery_status=str(payload.get("deliveryStatus") or ""),
            delivery_person_name=payload.get("deliveryPersonName"),
        )
    if notification_type is NotificationType.ORDER_STATUS:
        return OrderStatusMetadata(order_status=str(payload.get("orderStatus") or ""))
    return SystemMetadata(attributes=dict(payload))


@dataclass(frozen=True)
class Notification:
    """Message describing an order lifecycle event for a specific user.

    Only ``is_read`` may change after creation, and only from ``False`` to
    ``True``; the store produces a new instance when it does.
    """

    id: int | None
    user_id: str
    message: str
    order_id: str | None = None
    type: NotificationType = NotificationType.SYSTEM
    metadata: NotificationMetadata = field(default_factory=SystemMetadata)
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        expected = _METADATA_TYPES[self.type]
        if not isinstance(self.metadata, expected):
            msg = (
                f"{self.type.value} notifications require {expected.__name__}, "
                f"got {type(self.metadata).__name__}"
            )
            raise TypeError(msg)


__all__ = [
    "DeliveryUpdateMetadata",
    "Notification",
    "NotificationMetadata",
    "NotificationType",
    "OrderStatusMetadata",
    "SystemMetadata",
    "metadata_from_payload",
]
