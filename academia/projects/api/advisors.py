"""
Advisor assignment API controller for department heads.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import HasAction
from academia.core.exceptions import ErrorSchema
from academia.core.policy import Action
from academia.projects.schemas import AdvisorAssignSchema
from academia.projects.schemas import AvailableInstructorSchema
from academia.projects.schemas import DepartmentProjectSchema
from academia.projects.schemas import ProjectSchema
from academia.projects.services import AdvisorAssignmentService

ERRORS = {400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema, 409: ErrorSchema}


@api_controller("/advisors", tags=["Advisors"], permissions=[HasAction.to(Action.VIEW_DEPARTMENT)])
class AdvisorsController(BaseAPI):
    """Department head endpoints for project advisors."""

    advisors = AdvisorAssignmentService()

    @http_get(
        "/instructors",
        response={200: list[AvailableInstructorSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="advisors_available_instructors",
    )
    def available_instructors(self, request: HttpRequest):
        """Instructors of the department, least loaded first."""
        instructors = self.advisors.get_available_instructors(request.user.id)
        return 200, [AvailableInstructorSchema.from_user(u) for u in instructors]

    @http_get(
        "/projects",
        response={200: list[DepartmentProjectSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="advisors_projects",
    )
    def projects_with_advisors(self, request: HttpRequest):
        """All department projects with their advisor assignment."""
        projects = self.advisors.get_projects_with_advisors(request.user.id)
        return 200, [DepartmentProjectSchema.from_project(p) for p in projects]

    @http_get(
        "/projects/unassigned",
        response={200: list[DepartmentProjectSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="advisors_unassigned_projects",
    )
    def unassigned_projects(self, request: HttpRequest):
        """Department projects in progress that have no advisor yet."""
        projects = self.advisors.get_unassigned_projects(request.user.id)
        return 200, [DepartmentProjectSchema.from_project(p) for p in projects]

    @http_post(
        "/projects/{uuid:project_id}",
        response={200: ProjectSchema, **ERRORS},
        permissions=[HasAction.to(Action.ASSIGN_ADVISOR)],
        url_name="advisors_assign",
    )
    def assign_advisor(self, request: HttpRequest, project_id: UUID, data: AdvisorAssignSchema):
        """Assign an instructor of the student's department as advisor."""
        outcome = self.advisors.assign_advisor(project_id, data.advisor_id, request.user.id)
        return 200, ProjectSchema.from_project(outcome.value)

    @http_delete(
        "/projects/{uuid:project_id}",
        response={200: ProjectSchema, **ERRORS},
        permissions=[HasAction.to(Action.ASSIGN_ADVISOR)],
        url_name="advisors_remove",
    )
    def remove_advisor(self, request: HttpRequest, project_id: UUID):
        """Remove the project's advisor."""
        outcome = self.advisors.remove_advisor(project_id, request.user.id)
        return 200, ProjectSchema.from_project(outcome.value)
