"""
Read access to a single project for API controllers.
"""

from academia.core.exceptions import PermissionDeniedError
from academia.core.roles import Role
from academia.core.roles import is_admin
from academia.projects.models import Project


def can_view_project(project: Project, user) -> bool:
    """Participants, admins and the head of the student's department."""
    if project.can_be_viewed_by(user) or is_admin(user):
        return True
    return (
        user.role == Role.DEPARTMENT_HEAD
        and user.department_id is not None
        and user.department_id == project.student.department_id
    )


def ensure_can_view_project(project: Project, user) -> None:
    if not can_view_project(project, user):
        raise PermissionDeniedError("You cannot view this project.")
