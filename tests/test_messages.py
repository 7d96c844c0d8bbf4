"""Tests for the status to message templates."""

import pytest

from notification_service.application.use_cases.notifications.messages import (
    DELIVERY_MESSAGES,
    ORDER_MESSAGES,
    render_delivery_message,
    render_order_message,
)
from notification_service.domain.entities import DeliveryStatus, OrderStatus


def test_every_status_has_a_template():
    assert set(DELIVERY_MESSAGES) == set(DeliveryStatus)
    assert set(ORDER_MESSAGES) == set(OrderStatus)


@pytest.mark.parametrize(
    ("status", "name", "expected"),
    [
        (
            "Assigned",
            "Sam",
            "Your order #o1 has been assigned to a delivery person (Sam).",
        ),
        ("Assigned", None, "Your order #o1 has been assigned to a delivery person."),
        ("Accepted", "Sam", "Delivery for your order #o1 has been accepted by Sam."),
        ("Accepted", None, "Delivery for your order #o1 has been accepted."),
        (
            "Picked Up",
            "Sam",
            "Your order #o1 has been picked up by Sam and is on the way.",
        ),
        ("Picked Up", None, "Your order #o1 has been picked up and is on the way."),
        ("Delivered", "Sam", "Your order #o1 has been delivered. Enjoy your meal!"),
        ("Rejected", "Sam", "Delivery status for order #o1 updated to: Rejected"),
        ("Lost", None, "Delivery status for order #o1 updated to: Lost"),
    ],
)
def test_render_delivery_message(status, name, expected):
    assert render_delivery_message("o1", status, name) == expected


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("Confirmed", "Your order #o1 has been confirmed by the restaurant."),
        ("Preparing", "The restaurant has started preparing your order #o1."),
        ("Ready", "Your order #o1 is ready for pickup by delivery."),
        ("Out for Delivery", "Your order #o1 is out for delivery."),
        ("Delivered", "Your order #o1 has been delivered. Enjoy your meal!"),
        ("Cancelled", "Your order #o1 has been cancelled."),
        ("Placed", "Order #o1 status updated to: Placed"),
        ("On Hold", "Order #o1 status updated to: On Hold"),
    ],
)
def test_render_order_message(status, expected):
    assert render_order_message("o1", status) == expected


def test_braces_in_values_are_not_interpreted():
    assert (
        render_delivery_message("{order_id}", "Picked Up", "{name}")
        == "Your order #{order_id} has been picked up by {name} and is on the way."
    )
