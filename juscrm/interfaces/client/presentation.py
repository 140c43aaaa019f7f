"""Display helpers for notifications: colours, icons, labels and the badge."""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Mapping, TypeVar

from juscrm.domain.entities import NotificationPriority, NotificationType
from juscrm.interfaces.api.schemas import NotificationRead

from .notifications import UnreadNotificationPoller

BADGE_LIMIT = 99

PRIORITY_STYLES: Mapping[NotificationPriority, str] = {
    NotificationPriority.URGENT: "bg-red-100 text-red-800 border-red-200",
    NotificationPriority.HIGH: "bg-orange-100 text-orange-800 border-orange-200",
    NotificationPriority.MEDIUM: "bg-blue-100 text-blue-800 border-blue-200",
    NotificationPriority.LOW: "bg-gray-100 text-gray-800 border-gray-200",
}

PRIORITY_LABELS: Mapping[NotificationPriority, str] = {
    NotificationPriority.LOW: "Baixa",
    NotificationPriority.MEDIUM: "Média",
    NotificationPriority.HIGH: "Alta",
    NotificationPriority.URGENT: "Urgente",
}

TYPE_ICONS: Mapping[NotificationType, str] = {
    NotificationType.CASE_DEADLINE: "\u23f0",
    NotificationType.APPOINTMENT_REMINDER: "\U0001f4c5",
    NotificationType.DOCUMENT_UPLOADED: "\U0001f4c4",
    NotificationType.CASE_UPDATE: "\U0001f4cb",
    NotificationType.PAYMENT_DUE: "\U0001f4b0",
    NotificationType.SYSTEM_ANNOUNCEMENT: "\U0001f4e2",
    NotificationType.NEW_MESSAGE: "\U0001f4ac",
}

TYPE_LABELS: Mapping[NotificationType, str] = {
    NotificationType.CASE_DEADLINE: "Prazo de Caso",
    NotificationType.APPOINTMENT_REMINDER: "Lembrete de Compromisso",
    NotificationType.DOCUMENT_UPLOADED: "Documento Carregado",
    NotificationType.CASE_UPDATE: "Atualização de Caso",
    NotificationType.PAYMENT_DUE: "Pagamento Pendente",
    NotificationType.SYSTEM_ANNOUNCEMENT: "Anúncio do Sistema",
    NotificationType.NEW_MESSAGE: "Nova Mensagem",
}

_E = TypeVar("_E")


def _ensure_exhaustive(mapping: Mapping[_E, str], members: type[_E], name: str) -> None:
    missing = [member for member in members if member not in mapping]  # type: ignore[attr-defined]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(map(str, missing))}")


_ensure_exhaustive(PRIORITY_STYLES, NotificationPriority, "PRIORITY_STYLES")
_ensure_exhaustive(PRIORITY_LABELS, NotificationPriority, "PRIORITY_LABELS")
_ensure_exhaustive(TYPE_ICONS, NotificationType, "TYPE_ICONS")
_ensure_exhaustive(TYPE_LABELS, NotificationType, "TYPE_LABELS")


def priority_style(priority: NotificationPriority | str) -> str:
    return PRIORITY_STYLES[NotificationPriority(priority)]


def priority_label(priority: NotificationPriority | str) -> str:
    return PRIORITY_LABELS[NotificationPriority(priority)]


def type_icon(notification_type: NotificationType | str) -> str:
    return TYPE_ICONS[NotificationType(notification_type)]


def type_label(notification_type: NotificationType | str) -> str:
    return TYPE_LABELS[NotificationType(notification_type)]


def badge_label(count: int) -> str:
    """Text of the unread badge: empty when there is nothing unread."""

    if count <= 0:
        return ""
    if count > BADGE_LIMIT:
        return f"{BADGE_LIMIT}+"
    return str(count)


async def open_action(
    poller: UnreadNotificationPoller,
    notification: NotificationRead,
    opener: Callable[[str], "Awaitable[None] | None"],
) -> bool:
    """Open the notification's action URL and mark it as read.

    Returns ``False`` without side effects when the notification has no
    action URL.
    """

    if not notification.action_url:
        return False
    result = opener(notification.action_url)
    if inspect.isawaitable(result):
        await result
    await poller.mark_read(notification.id)
    return True


__all__ = [
    "BADGE_LIMIT",
    "PRIORITY_LABELS",
    "PRIORITY_STYLES",
    "TYPE_ICONS",
    "TYPE_LABELS",
    "badge_label",
    "open_action",
    "priority_label",
    "priority_style",
    "type_icon",
    "type_label",
]
