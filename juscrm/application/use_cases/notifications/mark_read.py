"""Use cases that move notifications from unread to read."""

import logging

from sqlalchemy.orm import Session

from juscrm.domain.entities import Notification
from juscrm.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def mark_read(session: Session, *, recipient_id: int, notification_id: int) -> Notification:
    """Mark ``notification_id`` as read for ``recipient_id``.

    Raises :class:`~juscrm.domain.exceptions.NotificationNotFoundError` when
    the notification is missing or addressed to another recipient. Marking an
    already read notification succeeds without changes.
    """

    return NotificationRepository(session).mark_as_read(
        notification_id, user_id=recipient_id
    )


def mark_all_read(session: Session, *, recipient_id: int) -> int:
    """Mark every unread notification of ``recipient_id`` and return how many changed."""

    updated = NotificationRepository(session).mark_all_as_read(recipient_id)
    logger.debug("Marked %s notifications as read for user %s", updated, recipient_id)
    return updated


__all__ = ["mark_all_read", "mark_read"]
