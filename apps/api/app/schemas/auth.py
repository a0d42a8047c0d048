"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    USER = "user"
    PUBLISHER = "publisher"
    ADMIN = "admin"


class AuthPrincipal(BaseModel):
    """Normalized authenticated principal used by business services."""

    user_id: str = Field(min_length=1)
    role: Role = Role.USER


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=6)
    role: Role = Role.USER

    @field_validator("role")
    @classmethod
    def _reject_admin(cls, role: Role) -> Role:
        if role is Role.ADMIN:
            raise ValueError("admin accounts cannot be self-registered")
        return role


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateDetailsRequest(BaseModel):
    name: str | None = None
    email: str | None = None


class UpdatePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class TokenResponse(BaseModel):
    success: bool = True
    token: str
