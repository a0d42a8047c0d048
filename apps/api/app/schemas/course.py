"""Course API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class MinimumSkill(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Course(BaseModel):
    id: str
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    weeks: int = Field(ge=1)
    tuition: float = Field(ge=0)
    minimum_skill: MinimumSkill
    scholarship_available: bool = False
    bootcamp: str
    user: str
    created_at: datetime


class CreateCourseRequest(BaseModel):
    title: str
    description: str
    weeks: int
    tuition: float
    minimum_skill: MinimumSkill
    scholarship_available: bool = False


class UpdateCourseRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    weeks: int | None = None
    tuition: float | None = None
    minimum_skill: MinimumSkill | None = None
    scholarship_available: bool | None = None
