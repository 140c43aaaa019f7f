"""Use case for creating users."""

from sqlalchemy.orm import Session

from juscrm.domain.entities import User
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.repositories import RoleRepository, UserRepository
from juscrm.infrastructure.security import get_password_hash
from juscrm.utils import now_in_app_timezone

from .validators import ensure_valid_password, normalize_email


def create_user(
    session: Session,
    *,
    name: str,
    role_id: int,
    email: str,
    password: str,
    created_by: int | None = None,
    must_change_password: bool = True,
    email_verified: bool = False,
    email_verification_token: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise ValueError("O email já está cadastrado")

    role = RoleRepository(session).get(role_id)
    if role is None:
        raise NotFoundError("Perfil não encontrado")

    user = User(
        id=None,
        role=role,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(ensure_valid_password(password)),
        must_change_password=must_change_password,
        last_login=None,
        created_by=created_by,
        created_at=now_in_app_timezone(),
        updated_by=None,
        updated_at=None,
        is_active=True,
        email_verified=email_verified,
        email_verification_token=email_verification_token,
    )
    return repository.create(user)
