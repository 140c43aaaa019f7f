"""Endpoints for the notification read-state of the authenticated user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from juscrm.application.use_cases.notifications import (
    count_unread as count_unread_uc,
    list_notifications as list_notifications_uc,
    mark_all_read as mark_all_read_uc,
    mark_read as mark_read_uc,
    publish_notification as publish_notification_uc,
)
from juscrm.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    User,
)
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.database import get_db
from juscrm.interfaces.api.dependencies import get_current_active_user, require_admin
from juscrm.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    is_read: bool | None = Query(None, alias="isRead"),
    notification_type: NotificationType | None = Query(None, alias="type"),
    priority: NotificationPriority | None = Query(None),
    page: int = Query(1, description="Página; valores menores que 1 viram 1"),
    limit: int = Query(10, description="Itens por página, limitado a 1..100"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationListResponse:
    """Lista as notificações do usuário autenticado, mais recentes primeiro."""

    result = list_notifications_uc(
        db,
        recipient_id=current_user.id,
        page=page,
        limit=limit,
        is_read=is_read,
        notification_type=notification_type,
        priority=priority,
    )
    if is_read is False and notification_type is None and priority is None:
        # The page total already counts every unread notification.
        unread = result.total
    else:
        unread = count_unread_uc(db, recipient_id=current_user.id)
    return NotificationListResponse(
        data=[_notification_to_schema(item) for item in result.items],
        pagination=PaginationRead(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
        unread_count=unread,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountResponse:
    """Conta as notificações não lidas do usuário autenticado."""

    return UnreadCountResponse(count=count_unread_uc(db, recipient_id=current_user.id))


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Marca uma notificação como lida."""

    try:
        notification = mark_read_uc(
            db, recipient_id=current_user.id, notification_id=notification_id
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _notification_to_schema(notification)


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResponse:
    """Marca todas as notificações não lidas do usuário como lidas."""

    return MarkAllReadResponse(updated=mark_all_read_uc(db, recipient_id=current_user.id))


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> NotificationRead:
    """Publica uma notificação para um usuário (uso administrativo)."""

    try:
        notification = publish_notification_uc(
            db,
            recipient_id=payload.recipient_id or current_user.id,
            notification_type=payload.type,
            priority=payload.priority,
            title=payload.title,
            message=payload.message,
            action_url=payload.action_url,
            metadata=payload.metadata,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _notification_to_schema(notification)


__all__ = ["router"]
