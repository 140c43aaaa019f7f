"""Use case for self-registration of client accounts."""

from sqlalchemy.orm import Session

from juscrm.domain.entities import ROLE_CLIENT, User
from juscrm.infrastructure.repositories import RoleRepository
from juscrm.infrastructure.security import generate_account_token

from .create_user import create_user


def register_client(
    session: Session, *, name: str, email: str, password: str
) -> tuple[User, str]:
    """Create an unverified client account.

    Returns the persisted user and the email verification token that must be
    delivered to the address.
    """

    role = RoleRepository(session).ensure(name="Cliente", alias=ROLE_CLIENT)
    token = generate_account_token()
    user = create_user(
        session,
        name=name,
        role_id=role.id,
        email=email,
        password=password,
        must_change_password=False,
        email_verification_token=token,
    )
    return user, token


__all__ = ["register_client"]
