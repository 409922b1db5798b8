"""
Advisor assignment.

A department head picks an instructor of the student's department to advise
a project. The advisor is independent of the instructor who reviewed the
title. Every write happens in one transaction together with its
notifications, with the project row locked while the checks run.
"""

import logging
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import DatabaseError
from django.db import transaction
from django.db.models import Count
from django.db.models import F
from django.utils import timezone

from academia.core.exceptions import ConflictError
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.core.roles import Role
from academia.core.roles import is_admin_tier
from academia.core.workflow import Outcome
from academia.notifications.dispatcher import NotificationDispatcher
from academia.notifications.dispatcher import NotificationIntent
from academia.notifications.models import NotificationType
from academia.projects.models import Project
from academia.projects.models import ProjectStatus
from academia.users.models import User

logger = logging.getLogger(__name__)

UNASSIGNED_STATUSES = [ProjectStatus.DRAFT, ProjectStatus.SUBMITTED, ProjectStatus.APPROVED]


class AdvisorAssignmentService:
    """Assigns and removes project advisors for a department head."""

    def __init__(self, dispatcher: NotificationDispatcher | None = None, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self.dispatcher = dispatcher or NotificationDispatcher(using=using)

    @property
    def users(self):
        return User.objects.using(self.using)

    def _lock_project(self, project_id: UUID) -> Project:
        try:
            return Project.objects.using(self.using).select_for_update().get(id=project_id)
        except Project.DoesNotExist:
            raise NotFoundError("Project not found.") from None

    def _get_user(self, user_id: UUID, message: str) -> User:
        try:
            return self.users.get(id=user_id)
        except User.DoesNotExist:
            raise NotFoundError(message) from None

    def _check_head_scope(self, head: User, student: User) -> None:
        if is_admin_tier(head.role):
            return
        if head.department_id is None or head.department_id != student.department_id:
            raise PermissionDeniedError("This project is outside your department.")

    def _write_assignment(self, project: Project, **columns) -> None:
        # Column-scoped write; status columns are left to the lifecycle service
        columns["modified"] = timezone.now()
        Project.objects.using(self.using).filter(id=project.id).update(**columns)
        for name, value in columns.items():
            setattr(project, name, value)

    def assign_advisor(self, project_id: UUID, advisor_id: UUID, department_head_id: UUID) -> Outcome[Project]:
        """
        Make ``advisor_id`` the advisor of the project.

        The returned project carries ``student`` and ``advisor`` for display.
        """
        with transaction.atomic(using=self.using):
            project = self._lock_project(project_id)
            student = self._get_user(project.student_id, "Student not found.")
            head = self._get_user(department_head_id, "Department head not found.")
            self._check_head_scope(head, student)

            instructor = self._get_user(advisor_id, "Instructor not found.")
            if instructor.role != Role.INSTRUCTOR:
                raise ValidationError(
                    "Selected user is not an instructor.",
                    field="advisor_id",
                    allowed=[Role.INSTRUCTOR.value],
                )
            if instructor.department_id is None or instructor.department_id != student.department_id:
                raise ValidationError(
                    "Instructor must belong to the same department as the student.",
                    field="advisor_id",
                    department_id=str(student.department_id) if student.department_id else None,
                )
            if project.advisor_id == instructor.id:
                raise ConflictError(
                    "This instructor is already assigned as the project advisor.",
                    code="ALREADY_ASSIGNED",
                )

            self._write_assignment(
                project,
                advisor_id=instructor.id,
                assigned_by_id=head.id,
                assigned_at=timezone.now(),
            )
            project.student = student
            project.advisor = instructor

            notifications = self.dispatcher.dispatch(
                [
                    NotificationIntent(
                        user_id=instructor.id,
                        title="Project Advisor Assignment",
                        message=(
                            f'You have been assigned as project advisor for "{project.title}" '
                            f"by {student.get_full_name()}"
                        ),
                        type=NotificationType.ADVISOR_ASSIGNED,
                    ),
                    NotificationIntent(
                        user_id=student.id,
                        title="Project Advisor Assigned",
                        message=f"{instructor.get_full_name()} has been assigned as your project advisor",
                        type=NotificationType.ADVISOR_ASSIGNED,
                    ),
                ]
            )

        logger.info("Advisor %s assigned to project %s by %s", instructor.id, project.id, head.id)
        return Outcome(project, tuple(notifications))

    def remove_advisor(self, project_id: UUID, department_head_id: UUID) -> Outcome[Project]:
        """Clear the project's advisor and notify the former advisor and the student."""
        with transaction.atomic(using=self.using):
            project = self._lock_project(project_id)
            student = self._get_user(project.student_id, "Student not found.")
            head = self._get_user(department_head_id, "Department head not found.")
            self._check_head_scope(head, student)

            if project.advisor_id is None:
                raise ValidationError("No advisor assigned to this project.", field="advisor_id")

            former = self.users.filter(id=project.advisor_id).first()
            former_id = project.advisor_id
            former_name = former.get_full_name() if former else "Your advisor"

            self._write_assignment(project, advisor_id=None, assigned_by_id=None, assigned_at=None)
            project.student = student

            notifications = self.dispatcher.dispatch(
                [
                    NotificationIntent(
                        user_id=former_id,
                        title="Project Advisor Removed",
                        message=f'You have been removed as project advisor for "{project.title}"',
                        type=NotificationType.ADVISOR_REMOVED,
                    ),
                    NotificationIntent(
                        user_id=student.id,
                        title="Project Advisor Removed",
                        message=f"{former_name} has been removed as your project advisor",
                        type=NotificationType.ADVISOR_REMOVED,
                    ),
                ]
            )

        logger.info("Advisor %s removed from project %s by %s", former_id, project.id, head.id)
        return Outcome(project, tuple(notifications))

    # Department views

    def _department_id(self, department_head_id: UUID) -> UUID | None:
        head = self._get_user(department_head_id, "Department head not found.")
        return head.department_id

    def get_available_instructors(self, department_head_id: UUID) -> list[User]:
        """Active instructors of the department, least loaded first, then by name."""
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return []
        try:
            return list(
                self.users.filter(role=Role.INSTRUCTOR.value, department_id=department_id, is_active=True)
                .select_related("department")
                .annotate(advised_projects_count=Count("advised_projects", distinct=True))
                .order_by("advised_projects_count", "first_name", "last_name")
            )
        except DatabaseError:
            logger.exception("Error listing available instructors for %s", department_head_id)
            return []

    def _department_projects(self, department_id: UUID):
        return (
            Project.objects.using(self.using)
            .filter(student__department_id=department_id)
            .select_related("student", "instructor", "advisor", "assigned_by")
            .annotate(evaluation_count=Count("evaluations", distinct=True))
            .order_by(F("submitted_at").desc(nulls_last=True))
        )

    def get_unassigned_projects(self, department_head_id: UUID) -> list[Project]:
        """Department projects without an advisor that are still in progress."""
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return []
        try:
            return list(
                self._department_projects(department_id).filter(
                    advisor__isnull=True,
                    status__in=UNASSIGNED_STATUSES,
                )
            )
        except DatabaseError:
            logger.exception("Error listing unassigned projects for %s", department_head_id)
            return []

    def get_projects_with_advisors(self, department_head_id: UUID) -> list[Project]:
        """Every department project with its advisor columns, assigned or not."""
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return []
        try:
            return list(self._department_projects(department_id))
        except DatabaseError:
            logger.exception("Error listing projects with advisors for %s", department_head_id)
            return []
