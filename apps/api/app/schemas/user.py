"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.auth import Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class User(BaseModel):
    id: str
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    role: Role = Role.USER
    created_at: datetime


class UserDocument(User):
    """Stored user shape; the password hash never leaves the service layer."""

    password: str = Field(min_length=1)


class CreateUserRequest(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=6)
    role: Role = Role.USER


class UpdateUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    role: Role | None = None
    password: str | None = Field(default=None, min_length=6)
