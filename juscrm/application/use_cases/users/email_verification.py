"""Use cases for confirming account email addresses."""

from dataclasses import replace

from sqlalchemy.orm import Session

from juscrm.domain.entities import User
from juscrm.domain.exceptions import InvalidTokenError, NotFoundError
from juscrm.infrastructure.repositories import UserRepository
from juscrm.infrastructure.security import generate_account_token
from juscrm.utils import now_in_app_timezone

from .validators import normalize_email


def verify_email(session: Session, *, token: str) -> User:
    """Mark the account owning ``token`` as verified and consume the token."""

    repository = UserRepository(session)
    user = repository.get_by_verification_token(token) if token else None
    if user is None:
        raise InvalidTokenError("Token de verificação inválido")

    return repository.update(
        replace(
            user,
            email_verified=True,
            email_verification_token=None,
            updated_by=user.id,
            updated_at=now_in_app_timezone(),
        )
    )


def resend_verification(session: Session, *, email: str) -> tuple[User, str]:
    """Issue a fresh verification token for an unverified account."""

    repository = UserRepository(session)
    user = repository.get_by_email(normalize_email(email))
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    if user.email_verified:
        raise ValueError("Email já verificado")

    token = generate_account_token()
    persisted = repository.update(
        replace(
            user,
            email_verification_token=token,
            updated_by=user.id,
            updated_at=now_in_app_timezone(),
        )
    )
    return persisted, token


__all__ = ["resend_verification", "verify_email"]
