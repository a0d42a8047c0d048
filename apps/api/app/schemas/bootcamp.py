"""Bootcamp API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from app.schemas.user import EMAIL_PATTERN


class Career(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    UI_UX = "UI/UX"
    DATA_SCIENCE = "Data Science"
    BUSINESS = "Business"
    OTHER = "Other"


class Bootcamp(BaseModel):
    id: str
    name: str = Field(min_length=1, max_length=50)
    slug: str | None = None
    description: str = Field(min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=r"^https?://\S+$")
    phone: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    address: str = Field(min_length=1)
    careers: list[Career] = Field(min_length=1)
    average_rating: float | None = Field(default=None, ge=1, le=10)
    average_cost: float | None = None
    photo: str = "no-photo.jpg"
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    user: str
    created_at: datetime


class BootcampSummary(BaseModel):
    id: str
    name: str
    description: str


class CreateBootcampRequest(BaseModel):
    name: str
    description: str
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str
    careers: list[Career]
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class UpdateBootcampRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    careers: list[Career] | None = None
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None
