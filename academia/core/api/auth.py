"""
Authentication classes for the API.
"""

from typing import Any

from django.http import HttpRequest
from ninja.security import SessionAuth as NinjaSessionAuth


class SessionAuth(NinjaSessionAuth):
    """
    Session-based authentication.

    The identity context of every workflow call comes from here: the
    authenticated user carries its id, role and department.
    """

    def authenticate(self, request: HttpRequest, key: str | None) -> Any | None:
        if request.user.is_authenticated:
            return request.user
        return None
