"""
Roster (instructor/student assignment) schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema


class AssignmentSchema(Schema):
    """Roster entry response schema."""

    id: UUID
    instructor_id: UUID
    student_id: UUID
    is_active: bool
    assigned_at: datetime


class AssignmentCreateSchema(Schema):
    """Schema for putting a student on an instructor's roster."""

    instructor_id: UUID
    student_id: UUID
