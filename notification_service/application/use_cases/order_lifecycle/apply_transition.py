"""Single authority for status changes on the three order axes."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Mapping

from notification_service.application.errors import (
    IllegalTransitionError,
    StaleVersionError,
    ValidationError,
)
from notification_service.domain.entities import (
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

_AXES: Mapping[StatusAxis, tuple[type[Enum], Mapping, str]] = {
    StatusAxis.ORDER: (OrderStatus, ORDER_TRANSITIONS, "order_status"),
    StatusAxis.DELIVERY: (DeliveryStatus, DELIVERY_TRANSITIONS, "delivery_status"),
    StatusAxis.PAYMENT: (PaymentStatus, PAYMENT_TRANSITIONS, "payment_status"),
}


def allowed_targets(axis: StatusAxis, current: Enum) -> frozenset:
    """Return the statuses reachable from ``current`` on ``axis``."""

    _, table, _ = _AXES[axis]
    return table.get(current, frozenset())


def apply_transition(
    lifecycle: OrderLifecycle,
    *,
    axis: StatusAxis,
    target: str,
    expected_version: int | None = None,
) -> OrderLifecycle:
    """Return ``lifecycle`` with ``axis`` moved to ``target``.

    Raises :class:`StaleVersionError` when ``expected_version`` is given and
    differs from ``lifecycle.version``, and :class:`IllegalTransitionError`
    when the move is not in the transition table of the axis.
    """

    if expected_version is not None and expected_version != lifecycle.version:
        raise StaleVersionError(
            f"Order changed since version {expected_version}; current version is "
            f"{lifecycle.version}"
        )

    status_type, table, field_name = _AXES[axis]
    try:
        target_status = status_type(target)
    except ValueError as exc:
        raise ValidationError(f"Unknown {axis.value} status: {target}") from exc

    current = getattr(lifecycle, field_name)
    if target_status not in table.get(current, frozenset()):
        raise IllegalTransitionError(
            f"Cannot move {axis.value} status from {current.value} to {target_status.value}"
        )

    if (
        axis is StatusAxis.PAYMENT
        and target_status is PaymentStatus.PAID
        and lifecycle.payment_method is PaymentMethod.CASH
        and lifecycle.order_status is not OrderStatus.DELIVERED
    ):
        raise IllegalTransitionError("Cash payments are settled only once the order is delivered")

    return replace(lifecycle, **{field_name: target_status, "version": lifecycle.version + 1})
