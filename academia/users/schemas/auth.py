"""
Authentication schemas for login and the current user.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr

from academia.core.policy import allowed_actions

if TYPE_CHECKING:
    from academia.users.models import User


class LoginSchema(Schema):
    """Login request schema."""

    email: EmailStr
    password: str


class UserSchema(Schema):
    """User response schema, the identity context seen by the frontend."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    role: str
    department_id: UUID | None = None
    is_active: bool
    is_staff: bool
    is_superuser: bool
    actions: list[str] = []

    @staticmethod
    def from_user(user: "User") -> "UserSchema":
        """Create schema from User model."""
        return UserSchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            department_id=user.department_id,
            is_active=user.is_active,
            is_staff=user.is_staff,
            is_superuser=user.is_superuser,
            actions=[action.value for action in allowed_actions(user.role)],
        )


class LoginResponseSchema(Schema):
    """Login response schema."""

    success: bool
    user: UserSchema | None = None
    csrf_token: str | None = None


class CSRFTokenSchema(Schema):
    """CSRF token response."""

    csrf_token: str
