"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from juscrm.domain.entities import Role, User
from juscrm.infrastructure.models import UserModel
from juscrm.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(UserModel.deleted.is_(False))
            .order_by(UserModel.id)
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self._base_query()
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_password_reset_token(self, token: str) -> User | None:
        model = self._get_model(password_reset_token=token)
        return self._to_entity(model) if model else None

    def get_by_verification_token(self, token: str) -> User | None:
        model = self._get_model(email_verification_token=token)
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return self._get_model(id=user_id) is not None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int, *, deleted_by: int | None = None) -> None:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)

        now = ensure_app_naive_datetime(now_in_app_timezone())
        model.deleted = True
        model.deleted_by = deleted_by
        model.deleted_at = now
        model.is_active = False
        model.updated_by = deleted_by
        model.updated_at = now
        self.session.add(model)
        self.session.commit()

    def _base_query(self, include_deleted: bool = False):
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        if not include_deleted:
            query = query.filter(UserModel.deleted.is_(False))
        return query

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        return self._base_query(include_deleted).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            name=model.name,
            email=model.email,
            password=model.password,
            must_change_password=model.must_change_password,
            last_login=ensure_app_timezone(model.last_login),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_by=model.updated_by,
            updated_at=ensure_app_timezone(model.updated_at),
            is_active=model.is_active,
            deleted=model.deleted,
            deleted_by=model.deleted_by,
            deleted_at=ensure_app_timezone(model.deleted_at),
            email_verified=model.email_verified,
            email_verification_token=model.email_verification_token,
            password_reset_token=model.password_reset_token,
            password_reset_expires_at=ensure_app_timezone(
                model.password_reset_expires_at
            ),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_by = user.created_by
            model.created_at = ensure_app_naive_datetime(
                user.created_at or now_in_app_timezone()
            )
        else:
            model.updated_by = user.updated_by
            model.updated_at = ensure_app_naive_datetime(user.updated_at)
        model.role_id = user.role.id
        model.name = user.name
        model.email = user.email
        model.password = user.password
        model.must_change_password = user.must_change_password
        model.email_verified = user.email_verified
        model.email_verification_token = user.email_verification_token
        model.password_reset_token = user.password_reset_token
        model.password_reset_expires_at = ensure_app_naive_datetime(
            user.password_reset_expires_at
        )
        model.last_login = ensure_app_naive_datetime(user.last_login)
        model.is_active = user.is_active
        model.deleted = user.deleted
        model.deleted_by = user.deleted_by
        model.deleted_at = ensure_app_naive_datetime(user.deleted_at)

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
