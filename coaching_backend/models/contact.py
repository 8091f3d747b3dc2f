"""
Contact form schemas.

Dependencies: pydantic
System role: Contact API contract
"""

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    """Public contact form submission."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    subject: str | None = Field(None, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)
