"""
Advisor assignment schemas.
"""

from uuid import UUID

from ninja import Schema

from academia.core.schemas import UserSummarySchema
from academia.projects.models import Project
from academia.projects.schemas.projects import ProjectSchema
from academia.users.models import User


class AdvisorAssignSchema(Schema):
    """Schema for assigning an advisor to a project."""

    advisor_id: UUID


class AvailableInstructorSchema(Schema):
    """An instructor who can be picked as advisor, with their current load."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    department_name: str | None = None
    advised_projects_count: int

    @staticmethod
    def from_user(user: User) -> "AvailableInstructorSchema":
        return AvailableInstructorSchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            department_name=user.department.name if user.department_id else None,
            advised_projects_count=getattr(user, "advised_projects_count", 0),
        )


class DepartmentProjectSchema(ProjectSchema):
    """A department project with its advisor assignment."""

    assigned_by: UserSummarySchema | None = None
    evaluation_count: int = 0

    @classmethod
    def from_project(cls, project: Project) -> "DepartmentProjectSchema":
        return cls(
            **cls.project_fields(project),
            assigned_by=UserSummarySchema.from_user(project.assigned_by) if project.assigned_by_id else None,
            evaluation_count=getattr(project, "evaluation_count", 0),
        )
