"""Populate a development database with roles, users and sample notifications.

Run with ``python -m scripts.seed``. Roles and users are only created when
missing, so the script can be executed repeatedly.
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from juscrm.application.use_cases.notifications import publish_notification
from juscrm.application.use_cases.users import create_user
from juscrm.domain.entities import (
    ROLE_ADMIN,
    ROLE_ASSISTANT,
    ROLE_CLIENT,
    ROLE_LAWYER,
    NotificationPriority,
    NotificationType,
    User,
)
from juscrm.infrastructure.database import SessionLocal, initialize_database
from juscrm.infrastructure.repositories import RoleRepository, UserRepository

logger = logging.getLogger(__name__)

ROLES = (
    ("Administrador", ROLE_ADMIN),
    ("Advogado", ROLE_LAWYER),
    ("Assistente", ROLE_ASSISTANT),
    ("Cliente", ROLE_CLIENT),
)

STAFF = (
    ("Administrador", "admin@juscrm.com", "admin123", ROLE_ADMIN),
    ("Dr. João Silva", "joao@juscrm.com", "lawyer123", ROLE_LAWYER),
    ("Maria Santos", "maria@juscrm.com", "assistant123", ROLE_ASSISTANT),
)

LAWYER_NOTIFICATIONS = (
    (
        NotificationType.CASE_DEADLINE,
        NotificationPriority.URGENT,
        "Prazo de contestação amanhã",
        "O prazo para contestação do Caso 1 vence amanhã.",
        "/cases/1",
    ),
    (
        NotificationType.APPOINTMENT_REMINDER,
        NotificationPriority.HIGH,
        "Audiência às 14h",
        "Audiência de conciliação hoje às 14h no fórum central.",
        "/agenda",
    ),
    (
        NotificationType.DOCUMENT_UPLOADED,
        NotificationPriority.MEDIUM,
        "Novo documento",
        "Cliente 1 enviou um novo documento para análise.",
        "/documents",
    ),
    (
        NotificationType.SYSTEM_ANNOUNCEMENT,
        NotificationPriority.LOW,
        "Bem-vindo ao JusCRM",
        "Confira as novidades da plataforma.",
        None,
    ),
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Cria dados de exemplo para o ambiente de desenvolvimento do JusCRM.",
    )
    parser.add_argument(
        "--clients",
        type=int,
        default=5,
        help="Quantidade de clientes de exemplo (padrão: 5)",
    )
    return parser.parse_args()


def _ensure_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role_id: int,
) -> tuple[User, bool]:
    existing = UserRepository(session).get_by_email(email)
    if existing is not None:
        logger.info("Usuário %s já existe; ignorando", email)
        return existing, False
    user = create_user(
        session,
        name=name,
        role_id=role_id,
        email=email,
        password=password,
        must_change_password=False,
        email_verified=True,
    )
    return user, True


def seed(session: Session, *, clients: int = 5) -> dict[str, int]:
    """Create the fixture records and return how many of each were added."""

    roles = {alias: RoleRepository(session).ensure(name=name, alias=alias) for name, alias in ROLES}
    created = {"users": 0, "notifications": 0}

    users: dict[str, User] = {}
    new_staff: set[str] = set()
    for name, email, password, alias in STAFF:
        user, is_new = _ensure_user(
            session, name=name, email=email, password=password, role_id=roles[alias].id
        )
        users[alias] = user
        if is_new:
            new_staff.add(alias)
            created["users"] += 1

    for index in range(1, clients + 1):
        _, is_new = _ensure_user(
            session,
            name=f"Cliente {index}",
            email=f"cliente{index}@juscrm.com",
            password="client123",
            role_id=roles[ROLE_CLIENT].id,
        )
        created["users"] += int(is_new)

    if ROLE_LAWYER not in new_staff:
        return created
    lawyer = users[ROLE_LAWYER]

    for notification_type, priority, title, message, action_url in LAWYER_NOTIFICATIONS:
        publish_notification(
            session,
            recipient_id=lawyer.id,
            notification_type=notification_type,
            priority=priority,
            title=title,
            message=message,
            action_url=action_url,
        )
        created["notifications"] += 1
    return created


def main() -> None:
    """Create tables and load the development fixtures."""

    logging.basicConfig(level=logging.INFO)
    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        created = seed(session, clients=args.clients)
    except (ValueError, SQLAlchemyError) as exc:
        session.rollback()
        raise SystemExit(f"Não foi possível popular o banco de dados: {exc}") from exc
    finally:
        session.close()

    print(
        "Seed concluído:\n"
        f"  Usuários criados: {created['users']}\n"
        f"  Notificações criadas: {created['notifications']}"
    )


if __name__ == "__main__":
    main()
