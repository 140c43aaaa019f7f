"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str
    must_change_password: bool


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Email cadastrado do usuário")


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "ForgotPasswordRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "Token",
    "VerifyEmailRequest",
]
