"""Domain entities exposed by the application."""

from .notification import (
    Notification,
    NotificationPage,
    NotificationPriority,
    NotificationType,
)
from .role import ROLE_ADMIN, ROLE_ASSISTANT, ROLE_CLIENT, ROLE_LAWYER, Role
from .user import User

__all__ = [
    "Notification",
    "NotificationPage",
    "NotificationPriority",
    "NotificationType",
    "Role",
    "ROLE_ADMIN",
    "ROLE_ASSISTANT",
    "ROLE_CLIENT",
    "ROLE_LAWYER",
    "User",
]
