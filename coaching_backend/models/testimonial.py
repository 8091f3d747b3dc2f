"""
Testimonial schemas.

Dependencies: pydantic
System role: Testimonial API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from coaching_backend.models.common import Notice


class CreateTestimonialRequest(BaseModel):
    """Request schema for creating a testimonial."""

    name: str = Field(..., min_length=1, max_length=255)
    role: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1)
    rating: int | None = Field(None, ge=1, le=5)
    image_url: str | None = Field(None, max_length=1024)
    published: bool = False
    is_featured: bool = False
    course_id: uuid.UUID | None = None


class UpdateTestimonialRequest(BaseModel):
    """Request schema for updating a testimonial; only given fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    content: str | None = Field(None, min_length=1)
    rating: int | None = Field(None, ge=1, le=5)
    image_url: str | None = Field(None, max_length=1024)
    published: bool | None = None
    is_featured: bool | None = None
    course_id: uuid.UUID | None = None


class TestimonialResponse(BaseModel):
    """Response schema for a testimonial."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    role: str | None
    company: str | None
    content: str
    rating: int | None
    image_url: str | None
    published: bool
    is_featured: bool
    course_id: uuid.UUID | None
    created_at: datetime


class TestimonialMutationResponse(BaseModel):
    testimonial: TestimonialResponse
    notice: Notice
