"""Domain entities exposed by the application."""

from .notification import (
    DeliveryUpdateMetadata,
    Notification,
    NotificationMetadata,
    NotificationType,
    OrderStatusMetadata,
    SystemMetadata,
    metadata_from_payload,
)
from .order_lifecycle import (
    DELIVERY_TRANSITIONS,
    ORDER_TRANSITIONS,
    PAYMENT_TRANSITIONS,
    DeliveryStatus,
    OrderLifecycle,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    StatusAxis,
)
from .principal import ADMIN_ROLE, Principal

__all__ = [
    "ADMIN_ROLE",
    "DELIVERY_TRANSITIONS",
    "DeliveryStatus",
    "DeliveryUpdateMetadata",
    "Notification",
    "NotificationMetadata",
    "NotificationType",
    "ORDER_TRANSITIONS",
    "OrderLifecycle",
    "OrderStatus",
    "OrderStatusMetadata",
    "PAYMENT_TRANSITIONS",
    "PaymentMethod",
    "PaymentStatus",
    "Principal",
    "StatusAxis",
    "SystemMetadata",
    "metadata_from_payload",
]
