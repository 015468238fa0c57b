"""Request and response schemas for the auth endpoints."""

from pydantic import EmailStr, Field

from .common import CamelModel
from .user import StrongPassword


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: StrongPassword


class TokenPair(CamelModel):
    token: str
    refresh_token: str


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class EmailRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    password: StrongPassword


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1)
    new_password: StrongPassword


class VerifyEmailRequest(CamelModel):
    code: str = Field(..., min_length=1)


class MeResponse(CamelModel):
    id: int
    name: str
    email: str
    role: str
    email_verified: bool
