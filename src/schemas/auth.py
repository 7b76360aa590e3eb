"""Authentication schemas."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., max_length=8)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=10)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        """3-8 English letters only."""
        if not re.fullmatch(r"[A-Za-z]{3,8}", value):
            raise ValueError("Username must be 3-8 English letters")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        """5-10 characters with at least one digit and one special character."""
        if not 5 <= len(value) <= 10:
            raise ValueError("Password must be 5-10 characters long")
        if not any(ch.isdigit() for ch in value):
            raise ValueError("Password must contain at least one number")
        if not any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in value):
            raise ValueError("Password must contain at least one special character")
        return value


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=8)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: "UserResponse"


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    first_name: str
    last_name: str
    country: str
    email: str
