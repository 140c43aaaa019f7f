"""Use cases for the notification read-state subsystem."""

from .count_unread import count_unread
from .events import notify_email_verified, notify_password_changed, notify_welcome
from .list_notifications import list_notifications, list_unread
from .mark_read import mark_all_read, mark_read
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest, clamp_pagination
from .publish import publish_notification

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PageRequest",
    "clamp_pagination",
    "count_unread",
    "list_notifications",
    "list_unread",
    "mark_all_read",
    "mark_read",
    "notify_email_verified",
    "notify_password_changed",
    "notify_welcome",
    "publish_notification",
]
