from .notification import (
    DeliveryStatusUpdateRequest,
    EmptyResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
    OrderStatusUpdateRequest,
)
from .order_lifecycle import (
    OrderLifecycleSnapshot,
    TransitionRequest,
    TransitionResponse,
)

__all__ = [
    "DeliveryStatusUpdateRequest",
    "EmptyResponse",
    "MarkAllReadResponse",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
    "OrderLifecycleSnapshot",
    "OrderStatusUpdateRequest",
    "TransitionRequest",
    "TransitionResponse",
]
