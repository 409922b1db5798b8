"""
User schemas for API requests and responses.
"""

from academia.users.schemas.auth import CSRFTokenSchema
from academia.users.schemas.auth import LoginResponseSchema
from academia.users.schemas.auth import LoginSchema
from academia.users.schemas.auth import UserSchema
from academia.users.schemas.roster import AssignmentCreateSchema
from academia.users.schemas.roster import AssignmentSchema

__all__ = [
    # Auth schemas
    "LoginSchema",
    "UserSchema",
    "LoginResponseSchema",
    "CSRFTokenSchema",
    # Roster schemas
    "AssignmentSchema",
    "AssignmentCreateSchema",
]
