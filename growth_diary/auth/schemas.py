import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class UserOut(BaseSchema):
    id: int
    username: str


class RegisterRequest(BaseSchema):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        value = value.strip()
        if not 3 <= len(value) <= 30:
            raise ValueError("Username must be between 3-30 characters")
        if not USERNAME_PATTERN.match(value):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value


class LoginRequest(BaseSchema):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class ChangePasswordRequest(BaseSchema):
    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword")

    @field_validator("current_password")
    @classmethod
    def check_current(cls, value: str) -> str:
        if not value:
            raise ValueError("Current password is required")
        return value

    @field_validator("new_password")
    @classmethod
    def check_new(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("New password must be at least 6 characters")
        return value


class AuthResponse(BaseModel):
    message: str
    user: UserOut


class AuthStatus(BaseModel):
    authenticated: bool
    user: Optional[UserOut] = None
