"""
Admin API controller for the instructor/student roster.
"""

import logging
from uuid import UUID

from django.http import HttpRequest
from django.utils import timezone
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import IsAdmin
from academia.core.exceptions import ErrorSchema
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import ValidationError
from academia.core.roles import Role
from academia.core.schemas import SuccessSchema
from academia.users.models import InstructorStudentAssignment
from academia.users.models import User
from academia.users.schemas import AssignmentCreateSchema
from academia.users.schemas import AssignmentSchema

logger = logging.getLogger(__name__)


@api_controller("/roster", tags=["Roster (Admin)"], permissions=[IsAdmin])
class RosterAdminController(BaseAPI):
    """Admin endpoints for instructor/student assignments."""

    @http_get(
        "/",
        response={200: list[AssignmentSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="roster_list",
    )
    def list_assignments(self, request: HttpRequest, instructor_id: UUID | None = None):
        """List roster entries, optionally for one instructor."""
        assignments = InstructorStudentAssignment.objects.order_by("-assigned_at")
        if instructor_id is not None:
            assignments = assignments.filter(instructor_id=instructor_id)
        return 200, [AssignmentSchema.from_orm(a) for a in assignments]

    @http_post(
        "/",
        response={201: AssignmentSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="roster_assign",
    )
    def assign(self, request: HttpRequest, data: AssignmentCreateSchema):
        """Put a student on an instructor's roster, reactivating a previous entry."""
        users = {u.id: u for u in User.objects.filter(id__in=[data.instructor_id, data.student_id])}
        instructor = users.get(data.instructor_id)
        student = users.get(data.student_id)
        if instructor is None or student is None:
            return NotFoundError("User not found.").to_response()
        if instructor.role != Role.INSTRUCTOR:
            return ValidationError("User is not an instructor.", field="instructor_id").to_response()
        if student.role != Role.STUDENT:
            return ValidationError("User is not a student.", field="student_id").to_response()

        assignment, _ = InstructorStudentAssignment.objects.update_or_create(
            instructor=instructor,
            student=student,
            defaults={"is_active": True, "assigned_at": timezone.now()},
        )
        logger.info("Student %s assigned to instructor %s", student.id, instructor.id)
        return 201, AssignmentSchema.from_orm(assignment)

    @http_delete(
        "/{uuid:assignment_id}",
        response={200: SuccessSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="roster_deactivate",
    )
    def deactivate(self, request: HttpRequest, assignment_id: UUID):
        """Deactivate a roster entry. The row is kept for history."""
        updated = InstructorStudentAssignment.objects.filter(id=assignment_id).update(is_active=False)
        if not updated:
            return NotFoundError("Assignment not found.").to_response()
        return 200, SuccessSchema(success=True, message="Assignment deactivated.")
