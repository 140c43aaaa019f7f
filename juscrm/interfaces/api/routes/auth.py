"""Endpoints de autenticação, cadastro e recuperação de conta."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from juscrm.application.use_cases.notifications import (
    notify_email_verified,
    notify_password_changed,
    notify_welcome,
)
from juscrm.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
    register_client,
    request_password_reset,
    resend_verification,
    reset_password,
    verify_email,
)
from juscrm.domain.exceptions import InvalidTokenError, NotFoundError
from juscrm.infrastructure.database import get_db
from juscrm.infrastructure.email import EmailSender
from juscrm.infrastructure.security import create_access_token, password_signature
from juscrm.interfaces.api.dependencies import get_email_sender
from juscrm.interfaces.api.schemas import (
    ForgotPasswordRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    Token,
    UserRead,
    VerifyEmailRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_PASSWORD_RESET_MESSAGE = (
    "Se o email estiver cadastrado, você receberá um link para redefinir a senha."
)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Autentica o usuário por email e devolve um token JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuário inativo",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role.alias,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
    )
    record_login(db, user.id)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "role": user.role.alias,
        "must_change_password": auth_status is AuthenticationStatus.MUST_CHANGE_PASSWORD,
    }


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """Cadastra um cliente e envia o email de verificação."""

    try:
        user, token = register_client(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    notify_welcome(db, user=user)
    if not email_sender.send_email_verification(user.email, user.name, token):
        logger.warning("Não foi possível enviar o email de verificação para %s", user.email)
    return UserRead.model_validate(user)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> MessageResponse:
    """Gera um token de recuperação e envia o link por email."""

    try:
        user, token = request_password_reset(db, email=payload.email)
    except ValueError as exc:
        logger.info("Solicitação de recuperação ignorada para %s: %s", payload.email, exc)
        return MessageResponse(message=_PASSWORD_RESET_MESSAGE)

    if not email_sender.send_password_reset_email(user.email, user.name, token):
        logger.warning("Não foi possível enviar o email de recuperação para %s", user.email)

    return MessageResponse(message=_PASSWORD_RESET_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password_with_token(
    payload: ResetPasswordRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Redefine a senha a partir de um token válido."""

    try:
        user = reset_password(db, token=payload.token, password=payload.password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    notify_password_changed(db, user=user)
    return MessageResponse(message="Senha redefinida com sucesso")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email_with_token(
    payload: VerifyEmailRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Confirma o email do usuário dono do token."""

    try:
        user = verify_email(db, token=payload.token)
    except InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    notify_email_verified(db, user=user)
    return MessageResponse(message="Email verificado com sucesso")


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification_email(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> MessageResponse:
    """Reenvia o email de verificação para contas ainda não verificadas."""

    try:
        user, token = resend_verification(db, email=payload.email)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not email_sender.send_email_verification(user.email, user.name, token):
        logger.warning("Não foi possível reenviar o email de verificação para %s", user.email)
    return MessageResponse(message="Email de verificação reenviado com sucesso")
