"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_service.application.errors import NotFoundError, PersistenceError
from notification_service.domain.entities import (
    Notification,
    NotificationType,
    metadata_from_payload,
)
from notification_service.infrastructure.models import NotificationModel
from notification_service.utils import (
    from_utc_naive_datetime,
    now_in_utc_naive_datetime,
    to_utc_naive_datetime,
)

DEFAULT_LIST_LIMIT = 50


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self._get_model(notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        limit = max(0, min(limit, DEFAULT_LIST_LIMIT))
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        now = now_in_utc_naive_datetime()
        model.user_id = notification.user_id
        model.message = notification.message
        model.order_id = notification.order_id
        model.type = notification.type
        model.is_read = False
        model.metadata_ = notification.metadata.to_payload()
        model.created_at = to_utc_naive_datetime(notification.created_at) or now
        model.updated_at = model.created_at
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError("Could not store the notification") from exc
        return self._to_entity(model)

    def mark_read(self, notification_id: int) -> Notification:
        """Set ``is_read`` on the row. Rows that are already read stay as they are."""

        try:
            (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .filter(NotificationModel.is_read.is_(False))
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.updated_at: now_in_utc_naive_datetime(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
            model = self.session.get(
                NotificationModel, notification_id, populate_existing=True
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError("Could not update the notification") from exc
        if model is None:
            raise NotFoundError(f"Notification with id {notification_id} not found")
        return self._to_entity(model)

    def mark_all_read(self, user_id: str) -> int:
        """Flip every unread row of ``user_id`` in one statement."""

        try:
            modified = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.is_read.is_(False))
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.updated_at: now_in_utc_naive_datetime(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError("Could not update the notifications") from exc
        return int(modified or 0)

    def delete(self, notification_id: int) -> None:
        try:
            removed = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError("Could not delete the notification") from exc
        if not removed:
            raise NotFoundError(f"Notification with id {notification_id} not found")

    def _get_model(self, notification_id: int) -> NotificationModel | None:
        try:
            return self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not read the notification") from exc

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        notification_type = NotificationType(model.type)
        return Notification(
            id=model.id,
            user_id=model.user_id,
            message=model.message,
            order_id=model.order_id,
            type=notification_type,
            metadata=metadata_from_payload(notification_type, model.metadata_),
            is_read=bool(model.is_read),
            created_at=from_utc_naive_datetime(model.created_at),
            updated_at=from_utc_naive_datetime(model.updated_at),
        )


__all__ = ["DEFAULT_LIST_LIMIT", "NotificationRepository"]
