"""
Project schemas.
"""

from datetime import datetime
from uuid import UUID

from django.utils import timezone
from ninja import Schema
from pydantic import field_validator

from academia.core.schemas import UserSummarySchema
from academia.projects.models import Project


class ProjectSchema(Schema):
    """Project response schema."""

    id: UUID
    title: str
    description: str
    status: str
    student: UserSummarySchema
    instructor: UserSummarySchema
    advisor: UserSummarySchema | None = None
    assigned_by_id: UUID | None = None
    assigned_at: datetime | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None
    created: datetime
    modified: datetime

    @classmethod
    def project_fields(cls, project: Project) -> dict:
        return {
            "id": project.id,
            "title": project.title,
            "description": project.description,
            "status": project.status,
            "student": UserSummarySchema.from_user(project.student),
            "instructor": UserSummarySchema.from_user(project.instructor),
            "advisor": UserSummarySchema.from_user(project.advisor) if project.advisor_id else None,
            "assigned_by_id": project.assigned_by_id,
            "assigned_at": project.assigned_at,
            "submitted_at": project.submitted_at,
            "approved_at": project.approved_at,
            "rejected_at": project.rejected_at,
            "created": project.created,
            "modified": project.modified,
        }

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSchema":
        return cls(**cls.project_fields(project))


class PendingProjectSchema(ProjectSchema):
    """A title waiting for review."""

    days_pending: int

    @classmethod
    def from_project(cls, project: Project) -> "PendingProjectSchema":
        since = project.submitted_at or project.created
        return cls(**cls.project_fields(project), days_pending=(timezone.now() - since).days)


class ProjectStatusSchema(Schema):
    """Status of a project as seen by its student."""

    id: UUID
    title: str
    description: str
    status: str
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None
    instructor_name: str
    instructor_email: str

    @staticmethod
    def from_project(project: Project) -> "ProjectStatusSchema":
        return ProjectStatusSchema(
            id=project.id,
            title=project.title,
            description=project.description,
            status=project.status,
            submitted_at=project.submitted_at,
            approved_at=project.approved_at,
            rejected_at=project.rejected_at,
            instructor_name=project.instructor.get_full_name(),
            instructor_email=project.instructor.email,
        )


class TitleSubmitSchema(Schema):
    """Schema for submitting a project title."""

    instructor_id: UUID
    title: str
    description: str = ""

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            msg = "The title is required."
            raise ValueError(msg)
        if len(v) > 255:
            msg = "The title must be at most 255 characters."
            raise ValueError(msg)
        return v


class TitleRequestSchema(Schema):
    """Schema for asking students to submit a title."""

    student_ids: list[UUID]

    @field_validator("student_ids")
    @classmethod
    def at_least_one_student(cls, v: list[UUID]) -> list[UUID]:
        if not v:
            msg = "At least one student is required."
            raise ValueError(msg)
        return v


class RejectTitleSchema(Schema):
    """Schema for rejecting a title."""

    reason: str | None = None
