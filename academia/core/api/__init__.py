from academia.core.api.auth import SessionAuth
from academia.core.api.base import BaseAPI
from academia.core.api.permissions import AllowAny
from academia.core.api.permissions import HasAction
from academia.core.api.permissions import IsAdmin
from academia.core.api.permissions import IsAuthenticated

__all__ = ["BaseAPI", "SessionAuth", "IsAuthenticated", "IsAdmin", "HasAction", "AllowAny"]
