"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy.orm import Query, Session

from juscrm.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from juscrm.domain.exceptions import NotificationNotFoundError
from juscrm.infrastructure.models import NotificationModel
from juscrm.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Read-state store for :class:`Notification` objects, scoped per recipient.

    Every query filters on the recipient, so a caller can never observe or
    mutate notifications addressed to somebody else. Read state only moves
    from unread to read.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        offset: int = 0,
        limit: int = 10,
        is_read: bool | None = None,
        notification_type: NotificationType | None = None,
        priority: NotificationPriority | None = None,
    ) -> tuple[list[Notification], int]:
        """Return one newest-first slice and the total size of the filtered set."""

        query = self._scoped(user_id)
        if is_read is not None:
            query = query.filter(NotificationModel.is_read.is_(is_read))
        if notification_type is not None:
            query = query.filter(NotificationModel.type == notification_type)
        if priority is not None:
            query = query.filter(NotificationModel.priority == priority)

        total = query.order_by(None).count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count_unread(self, user_id: int) -> int:
        return (
            self._scoped(user_id)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def get_for_user(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = self._get_model(notification_id, user_id=user_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.recipient_id,
            type=notification.type,
            priority=notification.priority,
            title=notification.title,
            message=notification.message,
            action_url=notification.action_url,
            extra=dict(notification.metadata or {}),
            is_read=notification.is_read,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
            read_at=ensure_app_naive_datetime(notification.read_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification:
        """Flag one notification as read.

        Raises :class:`NotificationNotFoundError` when the notification does
        not exist or belongs to another recipient. A notification that is
        already read is returned as is.
        """

        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            raise NotificationNotFoundError(notification_id)
        if model.is_read:
            return self._to_entity(model)

        model.is_read = True
        model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id`` in one statement.

        Returns the number of rows updated. The update either commits as a
        whole or is rolled back and the error re-raised.
        """

        try:
            updated = (
                self._scoped(user_id)
                .filter(NotificationModel.is_read.is_(False))
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: ensure_app_naive_datetime(
                            now_in_app_timezone()
                        ),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return int(updated or 0)

    def _scoped(self, user_id: int) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )

    def _get_model(self, notification_id: int, *, user_id: int) -> NotificationModel | None:
        return (
            self._scoped(user_id)
            .filter(NotificationModel.id == notification_id)
            .populate_existing()
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            title=model.title,
            message=model.message,
            action_url=model.action_url,
            metadata=dict(model.extra or {}),
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
