"""
Base schemas for the API.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema


class BaseSchema(Schema):
    """
    Base schema with common fields.

    Provides standard fields for models inheriting from BaseModel.
    """

    id: UUID
    created: datetime
    modified: datetime


class SuccessSchema(Schema):
    """Schema for success responses."""

    success: bool
    message: str | None = None


class UserSummarySchema(Schema):
    """Minimal user representation embedded in other payloads."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    role: str

    @staticmethod
    def from_user(user) -> "UserSummarySchema":
        return UserSummarySchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
        )
