"""
Course domain models and schemas.

Request/response schemas for courses and course templates.

Dependencies: pydantic
System role: Course API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from coaching_backend.boundary.db.models.course_model import CourseLevel
from coaching_backend.models.common import Notice

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

CourseFormat = Literal["virtual", "in-person", "hybrid"]


class CourseFields(BaseModel):
    """Descriptive fields shared by courses and templates."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=4096)
    content: str | None = None
    category: str | None = Field(None, max_length=120)
    level: CourseLevel | None = None
    price: float | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0, description="Duration in days")
    image_url: str | None = Field(None, max_length=1024)
    prerequisites: str | None = None


class CreateCourseRequest(CourseFields):
    """Request schema for creating a scheduled course."""

    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    location: str | None = Field(None, max_length=255)
    capacity: int | None = Field(None, ge=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_published: bool = False
    is_featured: bool = False


class UpdateCourseRequest(BaseModel):
    """Request schema for updating a course; only given fields change."""

    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=4096)
    content: str | None = None
    category: str | None = Field(None, max_length=120)
    level: CourseLevel | None = None
    price: float | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=1024)
    prerequisites: str | None = None
    location: str | None = Field(None, max_length=255)
    capacity: int | None = Field(None, ge=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_published: bool | None = None
    is_featured: bool | None = None


class PublishRequest(BaseModel):
    """Request schema for toggling publication."""

    is_published: bool


class CreateTemplateRequest(CourseFields):
    """Request schema for creating a course template."""

    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)


class UpdateTemplateRequest(BaseModel):
    """Request schema for updating a template's descriptive fields."""

    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=4096)
    content: str | None = None
    category: str | None = Field(None, max_length=120)
    level: CourseLevel | None = None
    price: float | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=1024)
    prerequisites: str | None = None


class CreateFromTemplateRequest(BaseModel):
    """
    Schedule a course from a template.

    slug is required; every other field overrides the template value
    when given.
    """

    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    title: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    location: str | None = Field(None, max_length=255)
    capacity: int | None = Field(None, ge=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_published: bool = False
    is_featured: bool = False


class CourseResponse(BaseModel):
    """Response schema for courses and templates."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    title: str
    description: str | None
    content: str | None
    category: str | None
    level: CourseLevel | None
    price: float | None
    duration: int | None
    image_url: str | None
    location: str | None
    prerequisites: str | None
    capacity: int | None
    start_date: datetime | None
    end_date: datetime | None
    is_published: bool
    is_featured: bool
    is_template: bool
    created_at: datetime
    updated_at: datetime


class CourseListResponse(BaseModel):
    """Response schema for course listings."""

    courses: list[CourseResponse]
    total: int


class CourseMutationResponse(BaseModel):
    """Response schema for course writes."""

    course: CourseResponse
    notice: Notice
