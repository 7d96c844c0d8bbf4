"""API tests for the order lifecycle transition endpoint."""

from __future__ import annotations


def _snapshot(**overrides):
    snapshot = {
        "orderStatus": "Placed",
        "deliveryStatus": "Unassigned",
        "paymentStatus": "unpaid",
        "paymentMethod": "card",
        "version": 0,
    }
    snapshot.update(overrides)
    return snapshot


def test_valid_transition_returns_next_snapshot(client, service_headers):
    response = client.post(
        "/order-lifecycle/transitions",
        json={"current": _snapshot(), "axis": "order", "target": "Confirmed", "expectedVersion": 0},
        headers=service_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["orderStatus"] == "Confirmed"
    assert body["data"]["version"] == 1


def test_illegal_transition_returns_409(client, service_headers):
    response = client.post(
        "/order-lifecycle/transitions",
        json={"current": _snapshot(orderStatus="Delivered"), "axis": "order", "target": "Cancelled"},
        headers=service_headers,
    )

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_stale_version_returns_409(client, service_headers):
    response = client.post(
        "/order-lifecycle/transitions",
        json={
            "current": _snapshot(version=4),
            "axis": "order",
            "target": "Confirmed",
            "expectedVersion": 3,
        },
        headers=service_headers,
    )

    assert response.status_code == 409


def test_cash_payment_before_delivery_returns_409(client, service_headers):
    response = client.post(
        "/order-lifecycle/transitions",
        json={"current": _snapshot(paymentMethod="cash"), "axis": "payment", "target": "paid"},
        headers=service_headers,
    )

    assert response.status_code == 409


def test_unknown_target_returns_400(client, service_headers):
    response = client.post(
        "/order-lifecycle/transitions",
        json={"current": _snapshot(), "axis": "order", "target": "Teleported"},
        headers=service_headers,
    )

    assert response.status_code == 400


def test_transition_requires_service_key(client):
    response = client.post(
        "/order-lifecycle/transitions",
        json={"current": _snapshot(), "axis": "order", "target": "Confirmed"},
    )

    assert response.status_code == 401
