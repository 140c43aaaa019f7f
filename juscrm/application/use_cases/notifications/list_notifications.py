"""Use cases for listing the notifications of a recipient."""

from sqlalchemy.orm import Session

from juscrm.domain.entities import (
    NotificationPage,
    NotificationPriority,
    NotificationType,
)
from juscrm.infrastructure.repositories import NotificationRepository

from .pagination import clamp_pagination


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    page: int | None = 1,
    limit: int | None = None,
    is_read: bool | None = None,
    notification_type: NotificationType | None = None,
    priority: NotificationPriority | None = None,
) -> NotificationPage:
    """Return one newest-first page of the recipient's notifications."""

    request = clamp_pagination(page, limit)
    items, total = NotificationRepository(session).list_for_user(
        recipient_id,
        offset=request.offset,
        limit=request.limit,
        is_read=is_read,
        notification_type=notification_type,
        priority=priority,
    )
    return NotificationPage(items=items, total=total, page=request.page, limit=request.limit)


def list_unread(
    session: Session,
    *,
    recipient_id: int,
    page: int | None = 1,
    limit: int | None = None,
) -> NotificationPage:
    """Return one newest-first page of unread notifications.

    ``total`` of the returned page is the recipient's unread count.
    """

    return list_notifications(
        session, recipient_id=recipient_id, page=page, limit=limit, is_read=False
    )


__all__ = ["list_notifications", "list_unread"]
