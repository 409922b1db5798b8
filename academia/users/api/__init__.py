"""
User API controllers.
"""

from academia.users.api.auth import AuthController
from academia.users.api.roster import RosterAdminController

__all__ = ["AuthController", "RosterAdminController"]
