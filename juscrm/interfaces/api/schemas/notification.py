"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from juscrm.domain.entities import NotificationPriority, NotificationType


class NotificationCreate(BaseModel):
    """Payload used by administrators to publish a notification."""

    model_config = ConfigDict(extra="forbid")

    recipient_id: int | None = Field(
        default=None, ge=1, description="Destinatário; o próprio usuário quando omitido"
    )
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.MEDIUM
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    action_url: str | None = Field(default=None, max_length=500)
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    action_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime
    read_at: datetime | None = None


class PaginationRead(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class NotificationListResponse(BaseModel):
    """One page of notifications plus the caller's unread count."""

    data: list[NotificationRead]
    pagination: PaginationRead
    unread_count: int = Field(
        ..., ge=0, description="Notificações não lidas no momento da consulta"
    )


class UnreadCountResponse(BaseModel):
    count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseModel):
    updated: int = Field(..., ge=0)


__all__ = [
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "UnreadCountResponse",
]
