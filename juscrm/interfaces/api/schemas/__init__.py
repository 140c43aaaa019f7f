from .auth import (
    ForgotPasswordRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    Token,
    VerifyEmailRequest,
)
from .notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
    UnreadCountResponse,
)
from .user import PasswordChangeRequest, RoleRead, UserCreate, UserRead, UserUpdate

__all__ = [
    "ForgotPasswordRequest",
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "PasswordChangeRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "RoleRead",
    "Token",
    "UnreadCountResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "VerifyEmailRequest",
]
