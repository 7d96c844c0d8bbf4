"""Tests for websocket group management and the realtime publisher."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from notification_service.domain.entities import (
    DeliveryUpdateMetadata,
    Notification,
    NotificationType,
)
from notification_service.infrastructure.notifications import (
    NOTIFICATION_EVENT,
    NotificationConnectionManager,
    NotificationPublisher,
    serialize_notification,
)


class FakeSocket:
    def __init__(self, fail: bool = False) -> None:
        self.sent = []
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise ConnectionError("socket closed")
        self.sent.append(data)


def _notification(user_id: str = "u1") -> Notification:
    return Notification(
        id=7,
        user_id=user_id,
        order_id="o1",
        message="Your order #o1 has been delivered. Enjoy your meal!",
        type=NotificationType.DELIVERY_UPDATE,
        metadata=DeliveryUpdateMetadata("Delivered"),
        created_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


def test_send_reaches_only_the_joined_group():
    manager = NotificationConnectionManager()
    mine, other, idle = FakeSocket(), FakeSocket(), FakeSocket()
    manager.register("s1", mine)
    manager.register("s2", other)
    manager.register("s3", idle)
    manager.join("s1", "u1")
    manager.join("s2", "u2")

    delivered = asyncio.run(manager.send_to_user("u1", {"type": "ping"}))

    assert delivered == 1
    assert mine.sent == [{"type": "ping"}]
    assert other.sent == []
    assert idle.sent == []


def test_send_without_subscribers_is_a_no_op():
    manager = NotificationConnectionManager()

    assert asyncio.run(manager.send_to_user("nobody", {"type": "ping"})) == 0


def test_join_requires_a_registered_session():
    manager = NotificationConnectionManager()

    with pytest.raises(KeyError):
        manager.join("missing", "u1")


def test_joining_again_moves_the_session():
    manager = NotificationConnectionManager()
    manager.register("s1", FakeSocket())
    manager.join("s1", "u1")
    manager.join("s1", "u2")

    assert manager.group_of("s1") == "u2"
    assert manager.sessions_for("u1") == set()
    assert manager.sessions_for("u2") == {"s1"}


def test_disconnect_removes_membership():
    manager = NotificationConnectionManager()
    manager.register("s1", FakeSocket())
    manager.join("s1", "u1")

    manager.disconnect("s1")
    manager.disconnect("s1")

    assert manager.group_of("s1") is None
    assert manager.sessions_for("u1") == set()


def test_failed_send_drops_the_session():
    manager = NotificationConnectionManager()
    healthy, broken = FakeSocket(), FakeSocket(fail=True)
    manager.register("ok", healthy)
    manager.register("broken", broken)
    manager.join("ok", "u1")
    manager.join("broken", "u1")

    delivered = asyncio.run(manager.send_to_user("u1", {"type": "ping"}))

    assert delivered == 1
    assert healthy.sent == [{"type": "ping"}]
    assert manager.sessions_for("u1") == {"ok"}


def test_serialize_notification_uses_camel_case_keys():
    payload = serialize_notification(_notification())

    assert payload["userId"] == "u1"
    assert payload["orderId"] == "o1"
    assert payload["type"] == "DELIVERY_UPDATE"
    assert payload["isRead"] is False
    assert payload["metadata"] == {"deliveryStatus": "Delivered", "deliveryPersonName": None}
    assert payload["createdAt"] == "2024-01-01T12:00:00+00:00"
    assert payload["updatedAt"] is None


def test_publisher_dispatch_inside_running_loop():
    manager = NotificationConnectionManager()
    socket = FakeSocket()
    manager.register("s1", socket)
    manager.join("s1", "u1")
    publisher = NotificationPublisher(manager)
    notification = _notification()

    async def scenario():
        publisher.dispatch(notification)
        publisher.dispatch(_notification(user_id="u2"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert socket.sent == [
        {"type": NOTIFICATION_EVENT, "data": serialize_notification(notification)}
    ]
