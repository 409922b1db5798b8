"""
Role definitions for Academia.

Defines the 5 roles used across the platform:
- Student: submits project titles, uploads project files
- Instructor: reviews titles and evaluates the students on their roster
- Department head: assigns advisors and monitors the department
- Admin / Super admin: administration tiers, not bound to a department
"""

from enum import Enum


class Role(str, Enum):
    """
    Enum of available roles in Academia.

    Values match the ``User.role`` column exactly.
    """

    STUDENT = "student"
    INSTRUCTOR = "instructor"
    DEPARTMENT_HEAD = "department_head"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """Return choices for Django model fields."""
        return [(role.value, ROLE_LABELS[role]) for role in cls]

    @classmethod
    def values(cls) -> list[str]:
        """Return all role values."""
        return [role.value for role in cls]


ROLE_LABELS = {
    Role.STUDENT: "Student",
    Role.INSTRUCTOR: "Instructor",
    Role.DEPARTMENT_HEAD: "Department head",
    Role.ADMIN: "Admin",
    Role.SUPER_ADMIN: "Super admin",
}

# Role descriptions for documentation and admin interfaces
ROLE_DESCRIPTIONS = {
    Role.STUDENT: "Student - Submits project titles and uploads project files",
    Role.INSTRUCTOR: "Instructor - Approves titles and evaluates assigned students",
    Role.DEPARTMENT_HEAD: "Department head - Assigns advisors and monitors the department",
    Role.ADMIN: "Admin - Platform administration",
    Role.SUPER_ADMIN: "Super admin - Full platform administration",
}

ADMIN_TIERS = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


def is_admin_tier(role: Role | str | None) -> bool:
    """Return True for the admin and super admin roles."""
    if role is None:
        return False
    try:
        return Role(role) in ADMIN_TIERS
    except ValueError:
        return False


def get_user_role(user) -> Role | None:
    """
    Get the role of a user.

    Args:
        user: Django User instance

    Returns:
        The user's Role, or None for anonymous users
    """
    if not user or not user.is_authenticated:
        return None
    return Role(user.role)


def user_has_role(user, role: Role | str) -> bool:
    """Check if a user has a specific role."""
    user_role = get_user_role(user)
    return user_role is not None and user_role == Role(role)


def user_has_any_role(user, roles: list[Role | str]) -> bool:
    """Check if a user has any of the specified roles."""
    user_role = get_user_role(user)
    return user_role is not None and user_role in {Role(r) for r in roles}


def is_admin(user) -> bool:
    """
    Check if user has admin privileges.

    Returns True for superusers or users with an admin-tier role.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return is_admin_tier(user.role)
