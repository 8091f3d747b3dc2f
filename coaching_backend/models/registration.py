"""
Registration domain models and schemas.

Request/response schemas for individual and group course registrations
and their administration.

Dependencies: pydantic
System role: Registration API contracts and input validation
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlalchemy import inspect as sa_inspect

from coaching_backend.boundary.db.models.registration_model import (
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.models.common import Notice


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class ParticipantDetails(BaseModel):
    """One participant: names and e-mail required, the rest free text."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=64)
    company: str | None = Field(None, max_length=255)
    special_requests: str | None = Field(None, max_length=4096)

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value: str) -> str:
        return _strip_required(value)


class GroupContact(BaseModel):
    """Person coordinating a group submission."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _strip_required(value)


class GroupParticipant(BaseModel):
    """Group member; company and requests come from the group."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=64)

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value: str) -> str:
        return _strip_required(value)


class IndividualRegistrationRequest(ParticipantDetails):
    """Request schema for an individual registration."""


class GroupRegistrationRequest(BaseModel):
    """
    Request schema for a group registration.

    The minimum participant count is a deployment setting and is checked
    by the registration service.
    """

    company: str = Field(..., min_length=1, max_length=255)
    contact_name: str = Field(..., min_length=1, max_length=255)
    contact_email: EmailStr
    contact_phone: str | None = Field(None, max_length=64)
    special_requests: str | None = Field(None, max_length=4096)
    participants: list[GroupParticipant] = Field(default_factory=list)

    @field_validator("company", "contact_name")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _strip_required(value)

    @property
    def contact(self) -> GroupContact:
        return GroupContact(
            name=self.contact_name,
            email=self.contact_email,
            phone=self.contact_phone,
        )


class UpdateRegistrationRequest(BaseModel):
    """Partial update of a registration; at least one field."""

    status: RegistrationStatus | None = None
    payment_status: PaymentStatus | None = None


class CourseSummary(BaseModel):
    """Course columns shown next to a registration."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    start_date: datetime | None = None


class OwnerProfile(BaseModel):
    """Profile of the registering user, when one exists."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class RegistrationResponse(BaseModel):
    """Response schema for one registration row."""

    id: uuid.UUID
    course_id: uuid.UUID
    user_id: uuid.UUID | None
    status: RegistrationStatus
    payment_status: PaymentStatus
    is_group: bool
    group_reference: str | None
    metadata: dict = Field(default_factory=dict, description="Participant details")
    created_at: datetime
    updated_at: datetime
    course: CourseSummary | None = None
    profile: OwnerProfile | None = None

    @classmethod
    def from_model(cls, registration, profile=None) -> "RegistrationResponse":
        """
        Build from an ORM row without triggering lazy loads.

        The course is included only when it was eagerly loaded.
        """
        course = None
        if "course" not in sa_inspect(registration).unloaded:
            course = registration.course
        return cls(
            id=registration.id,
            course_id=registration.course_id,
            user_id=registration.user_id,
            status=registration.status,
            payment_status=registration.payment_status,
            is_group=registration.is_group,
            group_reference=registration.group_reference,
            metadata=registration.registration_metadata or {},
            created_at=registration.created_at,
            updated_at=registration.updated_at,
            course=CourseSummary.model_validate(course) if course is not None else None,
            profile=OwnerProfile.model_validate(profile) if profile is not None else None,
        )


class RegistrationResult(BaseModel):
    """Response schema for a submitted individual registration."""

    registration: RegistrationResponse
    notice: Notice


class GroupRegistrationResult(BaseModel):
    """Response schema for a submitted group registration."""

    registrations: list[RegistrationResponse]
    group_reference: str
    notice: Notice


class StatusCounts(BaseModel):
    """Registration counts per status over a loaded list."""

    pending: int = 0
    confirmed: int = 0
    waitlist: int = 0
    cancelled: int = 0
    total: int = 0


class RegistrationListResponse(BaseModel):
    """Response schema for admin registration listings."""

    registrations: list[RegistrationResponse]
    counts: StatusCounts
