"""
Permission classes for API controllers.
"""

from typing import Any

from django.http import HttpRequest
from ninja_extra import permissions

from academia.core.policy import Action
from academia.core.policy import is_action_allowed
from academia.core.roles import is_admin


class IsAuthenticated(permissions.BasePermission):
    """
    Permission class that requires authentication.

    Checks if the user is authenticated before allowing access.
    """

    message = "Authentication required."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Check if the user is authenticated."""
        return bool(request.user and request.user.is_authenticated)


class IsAdmin(permissions.BasePermission):
    """Permission class that requires an admin-tier role or superuser status."""

    message = "Access restricted to administrators."

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        return is_admin(request.user)


class HasAction(permissions.BasePermission):
    """
    Permission class backed by the action policy table.

    Use ``HasAction.to(Action.UPLOAD_FILE)`` to get a permission class for one
    action; the entity-level constraint is left to the service.
    """

    action: Action | None = None
    message = "Your role does not allow this action."

    @classmethod
    def to(cls, action: Action) -> type["HasAction"]:
        """Build the permission class for ``action``."""
        return type(
            f"HasAction_{action.value}",
            (cls,),
            {"action": action, "message": f"Your role does not allow the '{action.value}' action."},
        )

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return is_action_allowed(user.role, self.action)


class AllowAny(permissions.BasePermission):
    """
    Permission class that allows any access.

    Used for public endpoints that don't require authentication.
    """

    def has_permission(self, request: HttpRequest, controller: Any) -> bool:
        """Always return True."""
        return True
