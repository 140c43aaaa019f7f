"""Use cases for the token based password recovery flow."""

from dataclasses import replace
from datetime import timedelta

from sqlalchemy.orm import Session

from juscrm.config import get_settings
from juscrm.domain.entities import User
from juscrm.domain.exceptions import InvalidTokenError, NotFoundError
from juscrm.infrastructure.repositories import UserRepository
from juscrm.infrastructure.security import generate_account_token, get_password_hash
from juscrm.utils import has_expired, now_in_app_timezone

from .validators import ensure_valid_password, normalize_email


def request_password_reset(session: Session, *, email: str) -> tuple[User, str]:
    """Issue a single-use reset token for the active account owning ``email``.

    A new request replaces any token issued before. The token expires after
    ``PASSWORD_RESET_EXPIRE_MINUTES``.
    """

    repository = UserRepository(session)
    user = repository.get_by_email(normalize_email(email))
    if user is None or not user.is_active:
        raise NotFoundError("Usuário não encontrado")

    now = now_in_app_timezone()
    token = generate_account_token()
    updated = replace(
        user,
        password_reset_token=token,
        password_reset_expires_at=now
        + timedelta(minutes=get_settings().password_reset_expire_minutes),
        updated_by=user.id,
        updated_at=now,
    )
    return repository.update(updated), token


def reset_password(session: Session, *, token: str, password: str) -> User:
    """Consume ``token`` and set ``password`` as the new account password."""

    ensure_valid_password(password)
    repository = UserRepository(session)
    user = repository.get_by_password_reset_token(token) if token else None
    if user is None or has_expired(user.password_reset_expires_at):
        raise InvalidTokenError("Token inválido ou expirado")

    now = now_in_app_timezone()
    updated = replace(
        user,
        password=get_password_hash(password),
        must_change_password=False,
        password_reset_token=None,
        password_reset_expires_at=None,
        updated_by=user.id,
        updated_at=now,
    )
    return repository.update(updated)


__all__ = ["request_password_reset", "reset_password"]
