"""
Evaluations API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja import Schema
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_patch
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import HasAction
from academia.core.api import IsAuthenticated
from academia.core.exceptions import ErrorSchema
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import PermissionDeniedError
from academia.core.policy import Action
from academia.core.roles import Role
from academia.core.roles import is_admin
from academia.core.schemas import SuccessSchema
from academia.evaluations.models import Evaluation
from academia.evaluations.monitoring import DepartmentMonitor
from academia.evaluations.schemas import EvaluationCreateSchema
from academia.evaluations.schemas import EvaluationSchema
from academia.evaluations.schemas import EvaluationStatisticsSchema
from academia.evaluations.schemas import EvaluationTypeStatisticsSchema
from academia.evaluations.schemas import EvaluationUpdateSchema
from academia.evaluations.schemas import InstructorPerformanceSchema
from academia.evaluations.services import EvaluationService
from academia.projects.api.access import can_view_project
from academia.projects.api.access import ensure_can_view_project
from academia.projects.services import ProjectLifecycleService
from academia.users.models import User
from academia.users.roster import RosterAuthority

ERRORS = {400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema}


class EvaluationPermissionSchema(Schema):
    can_evaluate: bool


@api_controller("/evaluations", tags=["Evaluations"], permissions=[IsAuthenticated])
class EvaluationsController(BaseAPI):
    """API endpoints for project evaluations and department monitoring."""

    evaluations = EvaluationService()
    monitor = DepartmentMonitor()
    lifecycle = ProjectLifecycleService()
    roster = RosterAuthority()

    def _can_view_evaluation(self, evaluation: Evaluation, user) -> bool:
        return evaluation.instructor_id == user.id or can_view_project(evaluation.project, user)

    def _can_view_student(self, student: User, user) -> bool:
        if student.id == user.id or is_admin(user):
            return True
        if user.role == Role.INSTRUCTOR:
            return self.roster.is_instructor_assigned_to_student(user.id, student.id)
        return (
            user.role == Role.DEPARTMENT_HEAD
            and user.department_id is not None
            and user.department_id == student.department_id
        )

    @http_post(
        "/",
        response={201: EvaluationSchema, **ERRORS},
        permissions=[HasAction.to(Action.EVALUATE)],
        url_name="evaluations_create",
    )
    def create_evaluation(self, request: HttpRequest, data: EvaluationCreateSchema):
        """Record an evaluation of a project whose student is on the instructor's roster."""
        outcome = self.evaluations.create_evaluation(
            project_id=data.project_id,
            instructor_id=request.user.id,
            evaluation_type=data.evaluation_type,
            score=data.score,
            feedback=data.feedback,
            recommendation=data.recommendation,
            status=data.status,
        )
        return 201, EvaluationSchema.from_evaluation(self.evaluations.get_evaluation(outcome.value.id))

    @http_get(
        "/statistics",
        response={200: EvaluationStatisticsSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.VIEW_DEPARTMENT)],
        url_name="evaluations_statistics",
    )
    def statistics(self, request: HttpRequest):
        """Evaluation totals and score range for the department."""
        stats = self.monitor.evaluation_statistics(request.user.id)
        return 200, EvaluationStatisticsSchema.from_statistics(stats)

    @http_get(
        "/statistics/types",
        response={200: list[EvaluationTypeStatisticsSchema], 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.VIEW_DEPARTMENT)],
        url_name="evaluations_statistics_by_type",
    )
    def statistics_by_type(self, request: HttpRequest):
        rows = self.monitor.statistics_by_type(request.user.id)
        return 200, [EvaluationTypeStatisticsSchema(**row) for row in rows]

    @http_get(
        "/instructor-performance",
        response={200: list[InstructorPerformanceSchema], 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.VIEW_DEPARTMENT)],
        url_name="evaluations_instructor_performance",
    )
    def instructor_performance(self, request: HttpRequest):
        """Department instructors ranked by completed evaluations."""
        instructors = self.monitor.instructor_performance(request.user.id)
        return 200, [InstructorPerformanceSchema.from_user(u) for u in instructors]

    @http_get(
        "/permission/{uuid:project_id}",
        response={200: EvaluationPermissionSchema, 403: ErrorSchema},
        permissions=[HasAction.to(Action.EVALUATE)],
        url_name="evaluations_permission",
    )
    def evaluation_permission(self, request: HttpRequest, project_id: UUID):
        """Whether the caller may evaluate the project."""
        allowed = self.evaluations.verify_evaluation_permission(request.user.id, project_id)
        return 200, EvaluationPermissionSchema(can_evaluate=allowed)

    @http_get(
        "/students/{uuid:student_id}",
        response={200: list[EvaluationSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="evaluations_student",
    )
    def student_evaluations(self, request: HttpRequest, student_id: UUID):
        """A student's evaluations, newest first."""
        student = User.objects.filter(id=student_id, role=Role.STUDENT.value).first()
        if student is None:
            return NotFoundError("Student not found.").to_response()
        if not self._can_view_student(student, request.user):
            return PermissionDeniedError("You cannot view this student's evaluations.").to_response()
        evaluations = self.evaluations.get_student_evaluations(student_id)
        return 200, [EvaluationSchema.from_evaluation(e) for e in evaluations]

    @http_get(
        "/projects/{uuid:project_id}",
        response={200: list[EvaluationSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="evaluations_project",
    )
    def project_evaluations(self, request: HttpRequest, project_id: UUID):
        project = self.lifecycle.get_project(project_id)
        ensure_can_view_project(project, request.user)
        evaluations = self.evaluations.get_project_evaluations(project_id)
        return 200, [EvaluationSchema.from_evaluation(e) for e in evaluations]

    @http_get(
        "/{uuid:evaluation_id}",
        response={200: EvaluationSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="evaluations_detail",
    )
    def get_evaluation(self, request: HttpRequest, evaluation_id: UUID):
        evaluation = self.evaluations.get_evaluation(evaluation_id)
        if not self._can_view_evaluation(evaluation, request.user):
            return PermissionDeniedError("You cannot view this evaluation.").to_response()
        return 200, EvaluationSchema.from_evaluation(evaluation)

    @http_patch(
        "/{uuid:evaluation_id}",
        response={200: EvaluationSchema, **ERRORS},
        permissions=[HasAction.to(Action.EVALUATE)],
        url_name="evaluations_update",
    )
    def update_evaluation(self, request: HttpRequest, evaluation_id: UUID, data: EvaluationUpdateSchema):
        """Change the fields sent; the rest of the evaluation is left as is."""
        changes = data.model_dump(exclude_unset=True)
        self.evaluations.update_evaluation(evaluation_id, changes, instructor_id=request.user.id)
        return 200, EvaluationSchema.from_evaluation(self.evaluations.get_evaluation(evaluation_id))

    @http_delete(
        "/{uuid:evaluation_id}",
        response={200: SuccessSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.EVALUATE)],
        url_name="evaluations_delete",
    )
    def delete_evaluation(self, request: HttpRequest, evaluation_id: UUID):
        self.evaluations.delete_evaluation(evaluation_id, instructor_id=request.user.id)
        return 200, SuccessSchema(success=True, message="Evaluation deleted.")
