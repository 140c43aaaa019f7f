"""Use cases for managing users and their accounts."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .change_password import change_password
from .create_user import create_user
from .delete_user import delete_user
from .email_verification import resend_verification, verify_email
from .get_user import get_user
from .list_users import list_users
from .password_reset import request_password_reset, reset_password
from .record_login import record_login
from .register_client import register_client
from .update_user import update_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "change_password",
    "create_user",
    "delete_user",
    "get_user",
    "list_users",
    "record_login",
    "register_client",
    "request_password_reset",
    "resend_verification",
    "reset_password",
    "update_user",
    "verify_email",
]
