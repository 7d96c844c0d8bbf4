"""Internal endpoints called by order, delivery and payment flows."""

from fastapi import APIRouter, Depends, status

from notification_service.application.errors import ApplicationError
from notification_service.application.use_cases.notifications import StatusEventGateway
from notification_service.interfaces.api.dependencies import (
    get_status_event_gateway,
    require_service_credential,
)
from notification_service.interfaces.api.errors import to_http_exception
from notification_service.interfaces.api.schemas import (
    DeliveryStatusUpdateRequest,
    NotificationRead,
    NotificationResponse,
    OrderStatusUpdateRequest,
)

router = APIRouter(
    prefix="/delivery-notifications",
    tags=["delivery-notifications"],
    dependencies=[Depends(require_service_credential)],
)


@router.post(
    "/status-update",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_delivery_status(
    payload: DeliveryStatusUpdateRequest,
    gateway: StatusEventGateway = Depends(get_status_event_gateway),
) -> NotificationResponse:
    """Store and push a notification for a delivery status change."""

    try:
        notification = gateway.record_delivery_status_notification(
            payload.user_id,
            payload.order_id,
            payload.status,
            delivery_person_name=payload.delivery_person_name,
            email=payload.email,
        )
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return NotificationResponse(data=NotificationRead.from_entity(notification))


@router.post(
    "/order-status",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_order_status(
    payload: OrderStatusUpdateRequest,
    gateway: StatusEventGateway = Depends(get_status_event_gateway),
) -> NotificationResponse:
    """Store and push a notification for an order status change."""

    try:
        notification = gateway.record_order_status_notification(
            payload.user_id, payload.order_id, payload.status
        )
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return NotificationResponse(data=NotificationRead.from_entity(notification))
