"""
Project title lifecycle.

A student submits a title to an instructor on their roster, which creates a
``draft`` project. The instructor approves or rejects it exactly once; a new
title is a new project.
"""

import logging
from collections.abc import Callable
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import IntegrityError
from django.db import transaction
from django_fsm import ConcurrentTransition
from django_fsm import TransitionNotAllowed

from academia.core.exceptions import AlreadyExistsError
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import NotOwnerError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.core.workflow import Outcome
from academia.notifications.dispatcher import NotificationDispatcher
from academia.notifications.dispatcher import NotificationIntent
from academia.notifications.models import NotificationType
from academia.projects.models import Project
from academia.projects.models import ProjectStatus
from academia.users.roster import RosterAuthority

logger = logging.getLogger(__name__)


def not_pending_error(status: str) -> PermissionDeniedError:
    return PermissionDeniedError(
        f"Project is not in pending status. Current status: {status}",
        code="NOT_PENDING",
        details={"status": status},
    )


class ProjectLifecycleService:
    """Title submission and review."""

    def __init__(
        self,
        roster: RosterAuthority | None = None,
        dispatcher: NotificationDispatcher | None = None,
        using: str = DEFAULT_DB_ALIAS,
    ):
        self.using = using
        self.roster = roster or RosterAuthority(using=using)
        self.dispatcher = dispatcher or NotificationDispatcher(using=using)

    @property
    def projects(self):
        return Project.objects.using(self.using)

    def get_project(self, project_id: UUID) -> Project:
        try:
            return self.projects.select_related("student", "instructor", "advisor").get(id=project_id)
        except Project.DoesNotExist:
            raise NotFoundError(f"Project {project_id} not found.") from None

    # Submission

    def request_title_submission(self, instructor_id: UUID, student_ids: list[UUID]) -> Outcome[list[UUID]]:
        """Ask students on the instructor's roster to submit a title."""
        student_ids = list(dict.fromkeys(student_ids))
        if not student_ids:
            raise ValidationError("At least one student is required.", field="student_ids", min_length=1)

        unassigned = self.roster.unassigned_students(instructor_id, student_ids)
        if unassigned:
            raise PermissionDeniedError(
                f"Instructor is not assigned to student {unassigned[0]}.",
                details={"student_id": str(unassigned[0])},
            )

        with transaction.atomic(using=self.using):
            notifications = self.dispatcher.dispatch(
                NotificationIntent(
                    user_id=student_id,
                    title="Project Title Submission Request",
                    message=(
                        "Your instructor has requested you to submit your project title. "
                        "Please submit your project title and description."
                    ),
                )
                for student_id in student_ids
            )

        logger.info("Instructor %s requested titles from %d student(s)", instructor_id, len(student_ids))
        return Outcome(student_ids, tuple(notifications))

    def submit_title(self, student_id: UUID, instructor_id: UUID, title: str, description: str = "") -> Outcome[Project]:
        """Create a draft project and notify the reviewing instructor."""
        if not (title or "").strip():
            raise ValidationError("Title is required.", field="title", min_length=1)

        if not self.roster.is_instructor_assigned_to_student(instructor_id, student_id):
            raise PermissionDeniedError(
                "Instructor is not assigned to this student.",
                details={"instructor_id": str(instructor_id)},
            )

        duplicate = AlreadyExistsError(
            "A project with this title already exists for this student.",
            details={"field": "title"},
        )
        if self.projects.filter(student_id=student_id, title=title).exists():
            raise duplicate

        with transaction.atomic(using=self.using):
            try:
                # Savepoint so a concurrent duplicate leaves the outer block usable
                with transaction.atomic(using=self.using):
                    project = self.projects.create(
                        student_id=student_id,
                        instructor_id=instructor_id,
                        title=title,
                        description=description or "",
                    )
            except IntegrityError:
                raise duplicate from None

            notifications = self.dispatcher.dispatch(
                [
                    NotificationIntent(
                        user_id=instructor_id,
                        title="New Project Title Submission",
                        message=(
                            f'Student has submitted a new project title: "{title}". '
                            "Please review and approve or reject."
                        ),
                    )
                ]
            )

        logger.info("Project %s submitted by student %s", project.id, student_id)
        return Outcome(project, tuple(notifications))

    # Review

    def approve_title(self, project_id: UUID, instructor_id: UUID) -> Outcome[Project]:
        """Approve a draft title and notify the student."""

        def intent(project: Project) -> NotificationIntent:
            return NotificationIntent(
                user_id=project.student_id,
                title="Project Title Approved",
                message=(
                    f'Your project title "{project.title}" has been approved by your instructor. '
                    "You can now upload project files."
                ),
                type=NotificationType.TITLE_APPROVED,
            )

        project, notifications = self._review(project_id, instructor_id, Project.approve, "approved_at", intent)
        logger.info("Project %s approved by instructor %s", project.id, instructor_id)
        return Outcome(project, notifications)

    def disapprove_title(self, project_id: UUID, instructor_id: UUID, reason: str | None = None) -> Outcome[Project]:
        """Reject a draft title and notify the student, with the reason when given."""
        reason = (reason or "").strip()

        def intent(project: Project) -> NotificationIntent:
            if reason:
                message = (
                    f'Your project title "{project.title}" has been rejected by your instructor. '
                    f"Reason: {reason}. Please submit a new title."
                )
            else:
                message = (
                    f'Your project title "{project.title}" has been rejected by your instructor. '
                    "Please submit a new title."
                )
            return NotificationIntent(
                user_id=project.student_id,
                title="Project Title Rejected",
                message=message,
                type=NotificationType.TITLE_REJECTED,
            )

        project, notifications = self._review(project_id, instructor_id, Project.reject, "rejected_at", intent)
        logger.info("Project %s rejected by instructor %s", project.id, instructor_id)
        return Outcome(project, notifications)

    def _review(
        self,
        project_id: UUID,
        instructor_id: UUID,
        decide: Callable[[Project], None],
        timestamp_field: str,
        intent: Callable[[Project], NotificationIntent],
    ) -> tuple[Project, tuple]:
        with transaction.atomic(using=self.using):
            project = self.get_project(project_id)

            if project.instructor_id != instructor_id:
                raise PermissionDeniedError("Instructor is not assigned to this project.")

            if project.status != ProjectStatus.DRAFT:
                raise not_pending_error(project.status)

            try:
                # Savepoint so a lost race leaves the outer block usable
                with transaction.atomic(using=self.using):
                    decide(project)
                    # Only the review columns, the advisor columns belong to another writer
                    project.save(update_fields=["status", timestamp_field])
            except TransitionNotAllowed:
                raise not_pending_error(project.status) from None
            except ConcurrentTransition:
                current = self.projects.filter(id=project_id).values_list("status", flat=True).first()
                raise not_pending_error(current or project.status) from None

            notifications = self.dispatcher.dispatch([intent(project)])

        return project, tuple(notifications)

    # Reads

    def get_project_status(self, project_id: UUID, student_id: UUID) -> Project:
        """Return the project if the student owns it."""
        project = self.get_project(project_id)
        if project.student_id != student_id:
            raise NotOwnerError(f"Student does not own project {project_id}.")
        return project

    def get_student_projects(self, student_id: UUID) -> list[Project]:
        return list(
            self.projects.filter(student_id=student_id).select_related("instructor", "advisor").order_by("-created")
        )

    def get_instructor_projects(self, instructor_id: UUID) -> list[Project]:
        return list(
            self.projects.filter(instructor_id=instructor_id).select_related("student", "advisor").order_by("-created")
        )

    def get_pending_projects(self, instructor_id: UUID) -> list[Project]:
        """Titles waiting for the instructor's review, oldest first."""
        return list(
            self.projects.filter(instructor_id=instructor_id, status=ProjectStatus.DRAFT)
            .select_related("student")
            .order_by("submitted_at")
        )
