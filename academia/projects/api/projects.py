"""
Projects API controller: title submission and review.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import HasAction
from academia.core.api import IsAuthenticated
from academia.core.exceptions import ErrorSchema
from academia.core.exceptions import PermissionDeniedError
from academia.core.policy import Action
from academia.core.roles import Role
from academia.core.schemas import SuccessSchema
from academia.projects.api.access import ensure_can_view_project
from academia.projects.schemas import PendingProjectSchema
from academia.projects.schemas import ProjectSchema
from academia.projects.schemas import ProjectStatusSchema
from academia.projects.schemas import RejectTitleSchema
from academia.projects.schemas import TitleRequestSchema
from academia.projects.schemas import TitleSubmitSchema
from academia.projects.services import ProjectLifecycleService

ERRORS = {400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema}


@api_controller("/projects", tags=["Projects"], permissions=[IsAuthenticated])
class ProjectsController(BaseAPI):
    """API endpoints for the project title workflow."""

    lifecycle = ProjectLifecycleService()

    @http_get("/", response={200: list[ProjectSchema], 403: ErrorSchema}, url_name="projects_list")
    def list_projects(self, request: HttpRequest):
        """List the student's own projects, or the projects an instructor reviews."""
        user = request.user
        if user.role == Role.STUDENT:
            projects = self.lifecycle.get_student_projects(user.id)
        elif user.role == Role.INSTRUCTOR:
            projects = self.lifecycle.get_instructor_projects(user.id)
        else:
            return PermissionDeniedError("Only students and instructors have projects.").to_response()
        return 200, [ProjectSchema.from_project(p) for p in projects]

    @http_post(
        "/",
        response={201: ProjectSchema, **ERRORS},
        permissions=[HasAction.to(Action.SUBMIT_TITLE)],
        url_name="projects_submit_title",
    )
    def submit_title(self, request: HttpRequest, data: TitleSubmitSchema):
        """Submit a project title to an instructor on the student's roster."""
        outcome = self.lifecycle.submit_title(
            student_id=request.user.id,
            instructor_id=data.instructor_id,
            title=data.title,
            description=data.description,
        )
        project = self.lifecycle.get_project(outcome.value.id)
        return 201, ProjectSchema.from_project(project)

    @http_post(
        "/title-requests",
        response={200: SuccessSchema, **ERRORS},
        permissions=[HasAction.to(Action.REQUEST_TITLE)],
        url_name="projects_request_titles",
    )
    def request_titles(self, request: HttpRequest, data: TitleRequestSchema):
        """Ask students on the instructor's roster to submit a title."""
        outcome = self.lifecycle.request_title_submission(request.user.id, data.student_ids)
        return 200, SuccessSchema(success=True, message=f"{len(outcome.value)} student(s) notified.")

    @http_get(
        "/pending",
        response={200: list[PendingProjectSchema], 403: ErrorSchema},
        permissions=[HasAction.to(Action.REVIEW_TITLE)],
        url_name="projects_pending",
    )
    def pending_projects(self, request: HttpRequest):
        """Titles waiting for the instructor's review, oldest first."""
        projects = self.lifecycle.get_pending_projects(request.user.id)
        return 200, [PendingProjectSchema.from_project(p) for p in projects]

    @http_get(
        "/{uuid:project_id}",
        response={200: ProjectSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="projects_detail",
    )
    def get_project(self, request: HttpRequest, project_id: UUID):
        """Get a project the caller takes part in."""
        project = self.lifecycle.get_project(project_id)
        ensure_can_view_project(project, request.user)
        return 200, ProjectSchema.from_project(project)

    @http_get(
        "/{uuid:project_id}/status",
        response={200: ProjectStatusSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.VIEW_PROJECT_STATUS)],
        url_name="projects_status",
    )
    def project_status(self, request: HttpRequest, project_id: UUID):
        """Get the review status of the student's own project."""
        project = self.lifecycle.get_project_status(project_id, request.user.id)
        return 200, ProjectStatusSchema.from_project(project)

    @http_post(
        "/{uuid:project_id}/approve",
        response={200: ProjectSchema, **ERRORS},
        permissions=[HasAction.to(Action.REVIEW_TITLE)],
        url_name="projects_approve",
    )
    def approve_title(self, request: HttpRequest, project_id: UUID):
        """Approve a pending title."""
        outcome = self.lifecycle.approve_title(project_id, request.user.id)
        return 200, ProjectSchema.from_project(outcome.value)

    @http_post(
        "/{uuid:project_id}/reject",
        response={200: ProjectSchema, **ERRORS},
        permissions=[HasAction.to(Action.REVIEW_TITLE)],
        url_name="projects_reject",
    )
    def reject_title(self, request: HttpRequest, project_id: UUID, data: RejectTitleSchema):
        """Reject a pending title, optionally with a reason for the student."""
        outcome = self.lifecycle.disapprove_title(project_id, request.user.id, data.reason)
        return 200, ProjectSchema.from_project(outcome.value)
