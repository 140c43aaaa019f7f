"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from juscrm.domain.entities import NotificationPriority, NotificationType
from juscrm.infrastructure.database import Base
from juscrm.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_unread", "user_id", "is_read", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(
        Enum(NotificationType, name="notification_type", native_enum=False, length=32),
        nullable=False,
    )
    priority = Column(
        Enum(
            NotificationPriority,
            name="notification_priority",
            native_enum=False,
            length=16,
        ),
        nullable=False,
        default=NotificationPriority.MEDIUM,
    )
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    action_url = Column(String(500), nullable=True)
    # ``metadata`` is reserved by the declarative base.
    extra = Column("metadata", JSON, nullable=False, default=dict)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", back_populates="notifications")


__all__ = ["NotificationModel"]
