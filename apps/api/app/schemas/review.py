"""Review API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class Review(BaseModel):
    id: str
    title: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1)
    rating: int = Field(ge=1, le=10)
    bootcamp: str
    user: str
    created_at: datetime


class CreateReviewRequest(BaseModel):
    title: str
    text: str
    rating: int


class UpdateReviewRequest(BaseModel):
    title: str | None = None
    text: str | None = None
    rating: int | None = None
