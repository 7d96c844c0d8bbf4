"""Status to message templates for order and delivery notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from notification_service.domain.entities import DeliveryStatus, OrderStatus

GENERIC_DELIVERY_TEMPLATE = "Delivery status for order #{order_id} updated to: {status}"
GENERIC_ORDER_TEMPLATE = "Order #{order_id} status updated to: {status}"


@dataclass(frozen=True)
class MessageTemplate:
    """A message with an optional clause naming the delivery person.

    ``text`` may reference ``{order_id}``, ``{status}`` and ``{person}``;
    ``{person}`` is replaced by ``person_clause`` when a name is known and by
    an empty string otherwise.
    """

    text: str
    person_clause: str = ""

    def render(self, *, order_id: str, status: str, person_name: str | None = None) -> str:
        person = self.person_clause.format(name=person_name) if person_name else ""
        return self.text.format(order_id=order_id, status=status, person=person)


DELIVERY_MESSAGES: Mapping[DeliveryStatus, MessageTemplate] = {
    DeliveryStatus.UNASSIGNED: MessageTemplate(GENERIC_DELIVERY_TEMPLATE),
    DeliveryStatus.ASSIGNED: MessageTemplate(
        "Your order #{order_id} has been assigned to a delivery person{person}.",
        person_clause=" ({name})",
    ),
    DeliveryStatus.ACCEPTED: MessageTemplate(
        "Delivery for your order #{order_id} has been accepted{person}.",
        person_clause=" by {name}",
    ),
    DeliveryStatus.PICKED_UP: MessageTemplate(
        "Your order #{order_id} has been picked up{person} and is on the way.",
        person_clause=" by {name}",
    ),
    DeliveryStatus.DELIVERED: MessageTemplate(
        "Your order #{order_id} has been delivered. Enjoy your meal!"
    ),
    DeliveryStatus.REJECTED: MessageTemplate(GENERIC_DELIVERY_TEMPLATE),
}

ORDER_MESSAGES: Mapping[OrderStatus, MessageTemplate] = {
    OrderStatus.PLACED: MessageTemplate(GENERIC_ORDER_TEMPLATE),
    OrderStatus.CONFIRMED: MessageTemplate(
        "Your order #{order_id} has been confirmed by the restaurant."
    ),
    OrderStatus.PREPARING: MessageTemplate(
        "The restaurant has started preparing your order #{order_id}."
    ),
    OrderStatus.READY: MessageTemplate("Your order #{order_id} is ready for pickup by delivery."),
    OrderStatus.OUT_FOR_DELIVERY: MessageTemplate("Your order #{order_id} is out for delivery."),
    OrderStatus.DELIVERED: MessageTemplate(
        "Your order #{order_id} has been delivered. Enjoy your meal!"
    ),
    OrderStatus.CANCELLED: MessageTemplate("Your order #{order_id} has been cancelled."),
}


def _parse(enum_type, value: str):
    try:
        return enum_type(value)
    except ValueError:
        return None


def render_delivery_message(
    order_id: str, status: str, delivery_person_name: str | None = None
) -> str:
    """Return the customer-facing text for a delivery status change."""

    known = _parse(DeliveryStatus, status)
    template = DELIVERY_MESSAGES[known] if known else MessageTemplate(GENERIC_DELIVERY_TEMPLATE)
    return template.render(order_id=order_id, status=status, person_name=delivery_person_name)


def render_order_message(order_id: str, status: str) -> str:
    """Return the customer-facing text for an order status change."""

    known = _parse(OrderStatus, status)
    template = ORDER_MESSAGES[known] if known else MessageTemplate(GENERIC_ORDER_TEMPLATE)
    return template.render(order_id=order_id, status=status)


__all__ = [
    "DELIVERY_MESSAGES",
    "MessageTemplate",
    "ORDER_MESSAGES",
    "render_delivery_message",
    "render_order_message",
]
