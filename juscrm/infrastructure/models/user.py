"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from juscrm.infrastructure.database import Base
from juscrm.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of an office account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    must_change_password = Column(Boolean, nullable=False, default=False)
    email_verified = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_verification_token = Column(String(64), nullable=True, index=True)
    password_reset_token = Column(String(64), nullable=True, index=True)
    password_reset_expires_at = Column(DateTime, nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_by = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    deleted_by = Column(Integer, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    role = relationship("RoleModel", lazy="joined")
    notifications = relationship(
        "NotificationModel",
        back_populates="user",
        passive_deletes=True,
    )


__all__ = ["UserModel"]
