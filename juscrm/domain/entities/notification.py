"""Domain entity representing a user notification."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Sequence


class NotificationType(str, Enum):
    """Closed set of events that can produce a notification."""

    CASE_DEADLINE = "CASE_DEADLINE"
    APPOINTMENT_REMINDER = "APPOINTMENT_REMINDER"
    DOCUMENT_UPLOADED = "DOCUMENT_UPLOADED"
    CASE_UPDATE = "CASE_UPDATE"
    PAYMENT_DUE = "PAYMENT_DUE"
    SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"
    NEW_MESSAGE = "NEW_MESSAGE"


class NotificationPriority(str, Enum):
    """Ordered urgency of a notification, from ``LOW`` to ``URGENT``."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {
    NotificationPriority.LOW: 0,
    NotificationPriority.MEDIUM: 1,
    NotificationPriority.HIGH: 2,
    NotificationPriority.URGENT: 3,
}


@dataclass
class Notification:
    """Information message delivered to a single recipient."""

    id: int | None
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.MEDIUM
    action_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None


@dataclass(frozen=True)
class NotificationPage:
    """One page of notifications plus the size of the full result set."""

    items: Sequence[Notification]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


__all__ = [
    "Notification",
    "NotificationPage",
    "NotificationPriority",
    "NotificationType",
]
