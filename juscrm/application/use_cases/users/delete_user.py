"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.repositories import UserRepository


def delete_user(session: Session, user_id: int, *, deleted_by: int | None = None) -> None:
    """Soft delete the specified user; its notifications are kept."""

    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise NotFoundError("Usuário não encontrado")
    repository.delete(user_id, deleted_by=deleted_by)
