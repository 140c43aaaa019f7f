"""Client-side collaborators for the notification endpoints."""

from .notifications import NotificationClient, UnreadNotificationPoller, UnreadSnapshot
from .presentation import (
    badge_label,
    open_action,
    priority_label,
    priority_style,
    type_icon,
    type_label,
)

__all__ = [
    "NotificationClient",
    "UnreadNotificationPoller",
    "UnreadSnapshot",
    "badge_label",
    "open_action",
    "priority_label",
    "priority_style",
    "type_icon",
    "type_label",
]
