"""
Read-only access to the instructor/student roster.
"""

from uuid import UUID

from django.db import DEFAULT_DB_ALIAS

from academia.users.models import InstructorStudentAssignment


class RosterAuthority:
    """Answers whether an instructor is responsible for a student."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def _active(self):
        return InstructorStudentAssignment.objects.using(self.using).filter(is_active=True)

    def is_instructor_assigned_to_student(self, instructor_id: UUID, student_id: UUID) -> bool:
        return self._active().filter(instructor_id=instructor_id, student_id=student_id).exists()

    def unassigned_students(self, instructor_id: UUID, student_ids: list[UUID]) -> list[UUID]:
        """Return the ids in ``student_ids`` that are not on the instructor's roster, in order."""
        assigned = set(
            self._active()
            .filter(instructor_id=instructor_id, student_id__in=student_ids)
            .values_list("student_id", flat=True)
        )
        return [student_id for student_id in student_ids if student_id not in assigned]
