"""Status axes of an order and the transitions allowed on each of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class OrderStatus(str, Enum):
    PLACED = "Placed"
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    READY = "Ready"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class DeliveryStatus(str, Enum):
    UNASSIGNED = "Unassigned"
    ASSIGNED = "Assigned"
    ACCEPTED = "Accepted"
    PICKED_UP = "Picked Up"
    DELIVERED = "Delivered"
    REJECTED = "Rejected"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"


class StatusAxis(str, Enum):
    """The three independently mutated status fields of an order."""

    ORDER = "order"
    DELIVERY = "delivery"
    PAYMENT = "payment"


_ORDER_FLOW = (
    OrderStatus.PLACED,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)


def _order_transitions() -> dict[OrderStatus, frozenset[OrderStatus]]:
    table: dict[OrderStatus, frozenset[OrderStatus]] = {}
    for current, following in zip(_ORDER_FLOW, _ORDER_FLOW[1:]):
        table[current] = frozenset({following, OrderStatus.CANCELLED})
    table[OrderStatus.DELIVERED] = frozenset()
    table[OrderStatus.CANCELLED] = frozenset()
    return table


ORDER_TRANSITIONS: Mapping[OrderStatus, frozenset[OrderStatus]] = _order_transitions()

DELIVERY_TRANSITIONS: Mapping[DeliveryStatus, frozenset[DeliveryStatus]] = {
    DeliveryStatus.UNASSIGNED: frozenset({DeliveryStatus.ASSIGNED}),
    DeliveryStatus.ASSIGNED: frozenset({DeliveryStatus.ACCEPTED, DeliveryStatus.REJECTED}),
    DeliveryStatus.ACCEPTED: frozenset({DeliveryStatus.PICKED_UP}),
    DeliveryStatus.PICKED_UP: frozenset({DeliveryStatus.DELIVERED}),
    DeliveryStatus.DELIVERED: frozenset(),
    DeliveryStatus.REJECTED: frozenset(),
}

PAYMENT_TRANSITIONS: Mapping[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.UNPAID: frozenset(
        {PaymentStatus.PENDING, PaymentStatus.PAID, PaymentStatus.FAILED}
    ),
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.REFUNDED: frozenset(),
    PaymentStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class OrderLifecycle:
    """Snapshot of the three status axes of one order.

    ``version`` increases by one on every accepted transition so callers can
    detect concurrent writers.
    """

    order_status: OrderStatus = OrderStatus.PLACED
    delivery_status: DeliveryStatus = DeliveryStatus.UNASSIGNED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_method: PaymentMethod = PaymentMethod.CARD
    version: int = 0


__all__ = [
    "DELIVERY_TRANSITIONS",
    "DeliveryStatus",
    "ORDER_TRANSITIONS",
    "OrderLifecycle",
    "OrderStatus",
    "PAYMENT_TRANSITIONS",
    "PaymentMethod",
    "PaymentStatus",
    "StatusAxis",
]
