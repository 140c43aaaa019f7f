"""Use case for updating user information."""

from dataclasses import replace

from sqlalchemy.orm import Session

from juscrm.domain.entities import User
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.repositories import RoleRepository, UserRepository
from juscrm.infrastructure.security import get_password_hash
from juscrm.utils import now_in_app_timezone

from .validators import ensure_valid_password, normalize_email


def update_user(
    session: Session,
    *,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
    must_change_password: bool | None = None,
    is_active: bool | None = None,
    password: str | None = None,
    role_id: int | None = None,
    updated_by: int | None = None,
) -> User:
    """Update the provided user with the new values."""

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise NotFoundError("Usuário não encontrado")

    new_email = current_user.email
    email_verified = current_user.email_verified
    if email is not None:
        normalized_email = normalize_email(email)
        if normalized_email != current_user.email:
            existing = repository.get_by_email(normalized_email)
            if existing and existing.id != user_id:
                raise ValueError("O email já está cadastrado")
            new_email = normalized_email
            email_verified = False

    new_role = current_user.role
    if role_id is not None and role_id != current_user.role.id:
        role = RoleRepository(session).get(role_id)
        if role is None:
            raise NotFoundError("Perfil não encontrado")
        new_role = role

    updated_user = replace(
        current_user,
        role=new_role,
        name=name.strip() if name is not None else current_user.name,
        email=new_email,
        email_verified=email_verified,
        must_change_password=(
            must_change_password
            if must_change_password is not None
            else current_user.must_change_password
        ),
        is_active=is_active if is_active is not None else current_user.is_active,
        updated_by=updated_by if updated_by is not None else current_user.updated_by,
        updated_at=now_in_app_timezone(),
    )

    if password:
        updated_user = replace(
            updated_user, password=get_password_hash(ensure_valid_password(password))
        )

    return repository.update(updated_user)
