"""Request and response schemas for users."""

import re
from typing import Annotated, Optional

from pydantic import AfterValidator, EmailStr, Field

from ..models import Role
from .common import CamelModel

PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,32}$"
)
PASSWORD_MESSAGE = (
    "Password must be 8 to 32 characters long and contain at least one uppercase "
    "letter, one lowercase letter, one number and one special character"
)


def check_password_strength(password: str) -> str:
    if not PASSWORD_PATTERN.match(password):
        raise ValueError(PASSWORD_MESSAGE)
    return password


StrongPassword = Annotated[str, AfterValidator(check_password_strength)]


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: StrongPassword
    role: Role = Role.USER


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[StrongPassword] = None
    role: Optional[Role] = None


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: Role
