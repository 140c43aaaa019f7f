"""Use case for a user changing their own password."""

from dataclasses import replace

from sqlalchemy.orm import Session

from juscrm.domain.entities import User
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.repositories import UserRepository
from juscrm.infrastructure.security import get_password_hash, verify_password
from juscrm.utils import now_in_app_timezone

from .validators import ensure_valid_password


def change_password(
    session: Session, *, user_id: int, current_password: str, new_password: str
) -> User:
    """Replace the password after checking the current one."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    if not verify_password(current_password, user.password):
        raise ValueError("Senha atual incorreta")
    ensure_valid_password(new_password)
    if verify_password(new_password, user.password):
        raise ValueError("A nova senha deve ser diferente da atual")

    return repository.update(
        replace(
            user,
            password=get_password_hash(new_password),
            must_change_password=False,
            updated_by=user.id,
            updated_at=now_in_app_timezone(),
        )
    )


__all__ = ["change_password"]
