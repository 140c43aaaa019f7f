"""Use case for creating notifications on behalf of event producers."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from juscrm.domain.entities import Notification, NotificationPriority, NotificationType
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.repositories import NotificationRepository, UserRepository
from juscrm.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def publish_notification(
    session: Session,
    *,
    recipient_id: int,
    notification_type: NotificationType,
    title: str,
    message: str,
    priority: NotificationPriority = NotificationPriority.MEDIUM,
    action_url: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    """Persist a new unread notification for ``recipient_id``."""

    if not UserRepository(session).exists(recipient_id):
        raise NotFoundError("Destinatário não encontrado")

    title = title.strip()
    message = message.strip()
    if not title:
        raise ValueError("Título é obrigatório")
    if not message:
        raise ValueError("Mensagem é obrigatória")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        type=NotificationType(notification_type),
        priority=NotificationPriority(priority),
        title=title,
        message=message,
        action_url=action_url or None,
        metadata=dict(metadata or {}),
        is_read=False,
        created_at=now_in_app_timezone(),
        read_at=None,
    )
    saved = NotificationRepository(session).create(notification)
    logger.info(
        "Notification %s (%s/%s) published for user %s",
        saved.id,
        saved.type.value,
        saved.priority.value,
        recipient_id,
    )
    return saved


__all__ = ["publish_notification"]
