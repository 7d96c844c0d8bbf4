"""Tests for the notification repository and the inbox use cases."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from sqlalchemy.exc import SQLAlchemyError

import notification_service.utils.datetime as app_datetime
from notification_service.application.errors import (
    ForbiddenError,
    NotFoundError,
    PersistenceError,
)
from notification_service.application.use_cases.notifications import (
    delete_notification,
    list_user_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from notification_service.domain.entities import (
    Notification,
    NotificationType,
    OrderStatusMetadata,
    Principal,
)
from notification_service.infrastructure.models import NotificationModel
from notification_service.infrastructure.repositories import NotificationRepository

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def _notification(user_id: str, *, minutes: int = 0, order_id: str = "o1") -> Notification:
    return Notification(
        id=None,
        user_id=user_id,
        order_id=order_id,
        message=f"Your order #{order_id} is out for delivery.",
        type=NotificationType.ORDER_STATUS,
        metadata=OrderStatusMetadata("Out for Delivery"),
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture()
def repository(db_session):
    return NotificationRepository(db_session)


def test_list_is_newest_first_and_capped(repository):
    for minute in range(55):
        repository.create(_notification("u1", minutes=minute, order_id=f"o{minute}"))
    repository.create(_notification("someone-else", minutes=100))

    listed = repository.list_for_user("u1")

    assert len(listed) == 50
    assert listed[0].order_id == "o54"
    assert listed[-1].order_id == "o5"
    assert all(n.user_id == "u1" for n in listed)
    created = [n.created_at for n in listed]
    assert created == sorted(created, reverse=True)


def test_list_limit_cannot_exceed_cap(repository):
    for minute in range(3):
        repository.create(_notification("u1", minutes=minute))

    assert len(repository.list_for_user("u1", limit=2)) == 2
    assert len(repository.list_for_user("u1", limit=500)) == 3


def test_equal_timestamps_fall_back_to_id(repository):
    first = repository.create(_notification("u1"))
    second = repository.create(_notification("u1"))

    assert [n.id for n in repository.list_for_user("u1")] == [second.id, first.id]


def test_metadata_round_trips_through_the_store(repository):
    saved = repository.create(_notification("u1"))

    loaded = repository.get(saved.id)

    assert loaded.metadata == OrderStatusMetadata("Out for Delivery")
    assert loaded.created_at.tzinfo is not None


def test_inbox_contains_unread_count(db_session, repository):
    first = repository.create(_notification("u1"))
    repository.create(_notification("u1", minutes=1))
    repository.mark_read(first.id)

    inbox = list_user_notifications(db_session, user_id="u1", requester=Principal("u1"))

    assert len(inbox.notifications) == 2
    assert inbox.unread_count == 1


def test_inbox_of_another_user_is_forbidden(db_session, repository):
    repository.create(_notification("u1"))

    with pytest.raises(ForbiddenError):
        list_user_notifications(db_session, user_id="u1", requester=Principal("u2"))


def test_admin_may_read_any_inbox(db_session, repository):
    repository.create(_notification("u1"))

    inbox = list_user_notifications(
        db_session, user_id="u1", requester=Principal("ops", role="Admin")
    )

    assert inbox.unread_count == 1


def test_mark_read_is_idempotent(db_session, repository):
    saved = repository.create(_notification("u1"))
    owner = Principal("u1")

    first = mark_notification_read(db_session, notification_id=saved.id, requester=owner)
    second = mark_notification_read(db_session, notification_id=saved.id, requester=owner)

    assert first.is_read is True
    assert second.is_read is True
    assert repository.count_unread("u1") == 0


def test_mark_read_by_non_owner_leaves_row_unread(db_session, repository):
    saved = repository.create(_notification("u1"))

    with pytest.raises(ForbiddenError):
        mark_notification_read(db_session, notification_id=saved.id, requester=Principal("u2"))

    assert repository.get(saved.id).is_read is False


def test_mark_read_of_missing_notification(db_session):
    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, notification_id=999, requester=Principal("u1"))


def test_mark_all_read_counts_only_unread(db_session, repository):
    for minute in range(5):
        saved = repository.create(_notification("u1", minutes=minute))
        if minute < 2:
            repository.mark_read(saved.id)
    repository.create(_notification("u2"))

    changed = mark_all_notifications_read(db_session, user_id="u1", requester=Principal("u1"))

    assert changed == 3
    assert repository.count_unread("u1") == 0
    assert repository.count_unread("u2") == 1
    assert mark_all_notifications_read(
        db_session, user_id="u1", requester=Principal("u1")
    ) == 0


def test_mark_all_read_for_another_user_is_forbidden(db_session, repository):
    repository.create(_notification("u1"))

    with pytest.raises(ForbiddenError):
        mark_all_notifications_read(db_session, user_id="u1", requester=Principal("u2"))

    assert repository.count_unread("u1") == 1


def test_delete_removes_the_row(db_session, repository):
    saved = repository.create(_notification("u1"))

    delete_notification(db_session, notification_id=saved.id, requester=Principal("u1"))

    assert repository.get(saved.id) is None
    with pytest.raises(NotFoundError):
        delete_notification(db_session, notification_id=saved.id, requester=Principal("u1"))


def test_delete_by_non_owner_keeps_the_row(db_session, repository):
    saved = repository.create(_notification("u1"))

    with pytest.raises(ForbiddenError):
        delete_notification(db_session, notification_id=saved.id, requester=Principal("u2"))

    assert repository.get(saved.id) is not None


def test_admin_may_delete_any_notification(db_session, repository):
    saved = repository.create(_notification("u1"))

    delete_notification(
        db_session, notification_id=saved.id, requester=Principal("ops", role="admin")
    )

    assert repository.get(saved.id) is None


def test_mutating_a_missing_row_raises_not_found(repository):
    with pytest.raises(NotFoundError):
        repository.mark_read(999)
    with pytest.raises(NotFoundError):
        repository.delete(999)


@pytest.mark.parametrize(
    "operation",
    [
        lambda repo: repo.create(_notification("u1", minutes=5)),
        lambda repo: repo.mark_all_read("u1"),
    ],
    ids=["create", "mark_all_read"],
)
def test_commit_failure_rolls_back_and_raises(db_session, repository, monkeypatch, operation):
    repository.create(_notification("u1"))
    rollbacks = []
    real_rollback = db_session.rollback

    def _failing_commit():
        raise SQLAlchemyError("commit failed")

    def _tracking_rollback():
        rollbacks.append(True)
        real_rollback()

    with monkeypatch.context() as patch:
        patch.setattr(db_session, "commit", _failing_commit)
        patch.setattr(db_session, "rollback", _tracking_rollback)
        with pytest.raises(PersistenceError):
            operation(repository)

    assert rollbacks == [True]
    assert len(repository.list_for_user("u1")) == 1
    assert repository.count_unread("u1") == 1
    repository.create(_notification("u1", minutes=10))
    assert repository.count_unread("u1") == 2


def test_timestamps_are_stored_in_utc_across_dst_change(db_session, repository, monkeypatch):
    try:
        eastern = ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("timezone database not available")
    monkeypatch.setattr(app_datetime, "get_app_timezone", lambda: eastern)

    # 01:30 EDT, then 01:10 EST forty minutes later.
    earlier = datetime(2024, 11, 3, 5, 30, tzinfo=timezone.utc)
    later = datetime(2024, 11, 3, 6, 10, tzinfo=timezone.utc)
    first = repository.create(replace(_notification("u1"), created_at=earlier))
    second = repository.create(replace(_notification("u1"), created_at=later))

    assert [n.id for n in repository.list_for_user("u1")] == [second.id, first.id]
    stored = db_session.get(NotificationModel, first.id)
    assert stored.created_at == datetime(2024, 11, 3, 5, 30)
    loaded = repository.get(first.id)
    assert loaded.created_at == earlier
    assert loaded.created_at.utcoffset() == timedelta(hours=-4)
