"""Use case for counting unread notifications."""

from sqlalchemy.orm import Session

from juscrm.infrastructure.repositories import NotificationRepository


def count_unread(session: Session, *, recipient_id: int) -> int:
    """Return how many notifications of ``recipient_id`` are still unread."""

    return NotificationRepository(session).count_unread(recipient_id)


__all__ = ["count_unread"]
