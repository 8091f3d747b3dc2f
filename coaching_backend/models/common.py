"""
Common response models and utilities.

Notice and error schemas shared by every router.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Notice(BaseModel):
    """
    User-facing notification produced by a mutating operation.

    Exactly one notice accompanies every success or failure.
    """

    title: str
    description: str | None = None
    variant: Literal["default", "destructive"] = "default"


class NoticeResponse(BaseModel):
    """Response carrying only a notice."""

    notice: Notice


class DataResponse(BaseModel, Generic[T]):
    """Generic mutation response: the affected data plus its notice."""

    data: T
    notice: Notice


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")
    notice: Notice | None = None


def success_notice(title: str, description: str | None = None) -> Notice:
    return Notice(title=title, description=description)


def failure_notice(title: str, description: str | None = None) -> Notice:
    return Notice(title=title, description=description, variant="destructive")
