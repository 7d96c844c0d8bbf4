"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, JSON, String, Text

from notification_service.domain.entities import NotificationType
from notification_service.infrastructure.database import Base
from notification_service.utils import now_in_utc_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    message = Column(Text, nullable=False)
    order_id = Column(String(64), nullable=True)
    type = Column(
        Enum(NotificationType, name="notification_type", native_enum=False, length=32),
        nullable=False,
        default=NotificationType.SYSTEM,
    )
    is_read = Column(Boolean, nullable=False, default=False)
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_utc_naive_datetime, index=True
    )
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_utc_naive_datetime,
        onupdate=now_in_utc_naive_datetime,
    )


__all__ = ["NotificationModel"]
