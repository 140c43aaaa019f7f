"""Notifications emitted by the account workflows."""

from sqlalchemy.orm import Session

from juscrm.domain.entities import NotificationPriority, NotificationType, User

from .publish import publish_notification


def notify_welcome(session: Session, *, user: User) -> None:
    """Greet a newly created account."""

    publish_notification(
        session,
        recipient_id=user.id,
        notification_type=NotificationType.SYSTEM_ANNOUNCEMENT,
        priority=NotificationPriority.LOW,
        title="Bem-vindo ao JusCRM",
        message=f"Olá, {user.name}! Sua conta foi criada com sucesso.",
        action_url="/profile",
    )


def notify_email_verified(session: Session, *, user: User) -> None:
    """Confirm that the account email address was verified."""

    publish_notification(
        session,
        recipient_id=user.id,
        notification_type=NotificationType.SYSTEM_ANNOUNCEMENT,
        priority=NotificationPriority.LOW,
        title="Email verificado",
        message="Seu endereço de email foi confirmado.",
    )


def notify_password_changed(session: Session, *, user: User) -> None:
    """Warn the account owner that the password changed."""

    publish_notification(
        session,
        recipient_id=user.id,
        notification_type=NotificationType.SYSTEM_ANNOUNCEMENT,
        priority=NotificationPriority.HIGH,
        title="Senha alterada",
        message=(
            "A senha da sua conta foi alterada. Se não foi você, "
            "entre em contato com o administrador imediatamente."
        ),
        action_url="/profile",
    )


__all__ = ["notify_email_verified", "notify_password_changed", "notify_welcome"]
