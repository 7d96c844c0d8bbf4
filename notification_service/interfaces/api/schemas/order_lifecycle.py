"""Pydantic models for the order lifecycle transition endpoint."""

from __future__ import annotations

from pydantic import Field

from notification_service.domain.entities import (
    DeliveryStatus,
    OrderLifecycle,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    StatusAxis,
)

from .base import CamelModel


class OrderLifecycleSnapshot(CamelModel):
    order_status: OrderStatus = OrderStatus.PLACED
    delivery_status: DeliveryStatus = DeliveryStatus.UNASSIGNED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_method: PaymentMethod = PaymentMethod.CARD
    version: int = Field(default=0, ge=0)

    def to_entity(self) -> OrderLifecycle:
        return OrderLifecycle(
            order_status=self.order_status,
            delivery_status=self.delivery_status,
            payment_status=self.payment_status,
            payment_method=self.payment_method,
            version=self.version,
        )

    @classmethod
    def from_entity(cls, lifecycle: OrderLifecycle) -> "OrderLifecycleSnapshot":
        return cls(
            order_status=lifecycle.order_status,
            delivery_status=lifecycle.delivery_status,
            payment_status=lifecycle.payment_status,
            payment_method=lifecycle.payment_method,
            version=lifecycle.version,
        )


class TransitionRequest(CamelModel):
    """Proposed change of one status axis on the current snapshot."""

    current: OrderLifecycleSnapshot
    axis: StatusAxis
    target: str = Field(..., min_length=1)
    expected_version: int | None = Field(default=None, ge=0)


class TransitionResponse(CamelModel):
    success: bool = True
    data: OrderLifecycleSnapshot


__all__ = ["OrderLifecycleSnapshot", "TransitionRequest", "TransitionResponse"]
