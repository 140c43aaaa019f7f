"""Rotas para administrar usuários e suas credenciais."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from juscrm.application.use_cases.notifications import (
    notify_password_changed,
    notify_welcome,
)
from juscrm.application.use_cases.users import (
    change_password as change_password_uc,
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    update_user as update_user_uc,
)
from juscrm.domain.entities import User
from juscrm.domain.exceptions import NotFoundError
from juscrm.infrastructure.database import get_db
from juscrm.infrastructure.email import EmailSender
from juscrm.infrastructure.security import generate_secure_password
from juscrm.interfaces.api.dependencies import (
    get_current_active_user,
    get_email_sender,
    require_admin,
)
from juscrm.interfaces.api.schemas import (
    MessageResponse,
    PasswordChangeRequest,
    UserCreate,
    UserRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


def _http_error(exc: ValueError) -> HTTPException:
    status_code = (
        status.HTTP_404_NOT_FOUND
        if isinstance(exc, NotFoundError)
        else status.HTTP_400_BAD_REQUEST
    )
    return HTTPException(status_code=status_code, detail=str(exc))


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """Cria um novo usuário com uma senha temporária enviada por email."""

    generated_password = generate_secure_password()
    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            role_id=user_in.role_id,
            email=user_in.email,
            password=generated_password,
            created_by=current_user.id,
        )
    except ValueError as exc:
        raise _http_error(exc) from exc

    notify_welcome(db, user=user)
    if not email_sender.send_new_user_credentials_email(
        user.email, user.name, generated_password
    ):
        logger.warning("Não foi possível enviar as credenciais para %s", user.email)

    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Devolve os dados do usuário autenticado."""

    return _to_read_model(current_user)


@router.put("/me/password", response_model=MessageResponse)
def change_own_password(
    payload: PasswordChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Altera a senha do usuário autenticado."""

    try:
        user = change_password_uc(
            db,
            user_id=current_user.id,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
    except ValueError as exc:
        raise _http_error(exc) from exc

    notify_password_changed(db, user=user)
    return MessageResponse(message="Senha alterada com sucesso")


@router.get("", response_model=list[UserRead])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Lista os usuários cadastrados."""

    return [_to_read_model(user) for user in list_users_uc(db, skip=skip, limit=limit)]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Obtém o usuário identificado por ``user_id``."""

    try:
        user = get_user_uc(db, user_id, include_inactive=True)
    except ValueError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(user)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Atualiza os dados de um usuário existente."""

    update_data = user_in.model_dump(exclude_unset=True)
    if user_id == current_user.id and update_data.get("is_active") is False:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="O administrador não pode desativar a própria conta",
        )

    try:
        user = update_user_uc(
            db,
            user_id=user_id,
            name=update_data.get("name"),
            email=update_data.get("email"),
            is_active=update_data.get("is_active"),
            role_id=update_data.get("role_id"),
            updated_by=current_user.id,
        )
    except ValueError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Remove (logicamente) o usuário indicado."""

    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="O administrador não pode remover a própria conta",
        )
    try:
        delete_user_uc(db, user_id, deleted_by=current_user.id)
    except ValueError as exc:
        raise _http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
