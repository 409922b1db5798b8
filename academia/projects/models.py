"""
Models for student projects.

Contains:
- Project: a submitted project title and its approval/advising state
- ProjectFile: metadata of a file uploaded for an approved project
"""

import logging

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from django_fsm import ConcurrentTransitionMixin
from django_fsm import FSMField
from django_fsm import transition

from academia.core.models import BaseModel

logger = logging.getLogger(__name__)


class ProjectStatus(models.TextChoices):
    """Status choices for projects (FSM states)."""

    DRAFT = "draft", _("Draft")  # Title submitted, waiting for review
    SUBMITTED = "submitted", _("Submitted")
    APPROVED = "approved", _("Approved")  # Files may be uploaded
    REJECTED = "rejected", _("Rejected")


class Project(ConcurrentTransitionMixin, BaseModel):
    """
    A student's project, created when the student submits a title.

    Uses django-fsm for the title review with protected transitions:
    - draft: title submitted, waiting for the instructor
    - approved: title accepted, file uploads are open
    - rejected: title refused, the student submits a new project

    ``ConcurrentTransitionMixin`` adds the loaded status to the UPDATE's
    WHERE clause, so of two concurrent reviews only one can be saved.

    ``instructor`` reviews the title and never changes. ``advisor`` is set
    later by a department head and is unrelated to ``instructor``.
    """

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="projects",
        verbose_name=_("student"),
    )
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviewed_projects",
        verbose_name=_("instructor"),
        help_text=_("Instructor who reviews the title"),
    )
    advisor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="advised_projects",
        verbose_name=_("advisor"),
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="advisor_assignments",
        db_column="assigned_by",
        verbose_name=_("assigned by"),
        help_text=_("Department head who set the advisor"),
    )
    assigned_at = models.DateTimeField(_("assigned at"), null=True, blank=True)

    title = models.CharField(_("title"), max_length=255)
    description = models.TextField(_("description"), blank=True)

    # FSM status field with protected transitions
    status = FSMField(
        _("status"),
        default=ProjectStatus.DRAFT,
        choices=ProjectStatus.choices,
        protected=True,
    )
    submitted_at = models.DateTimeField(_("submitted at"), null=True, blank=True, default=timezone.now)
    approved_at = models.DateTimeField(_("approved at"), null=True, blank=True)
    rejected_at = models.DateTimeField(_("rejected at"), null=True, blank=True)

    class Meta:
        db_table = "projects"
        verbose_name = _("project")
        verbose_name_plural = _("projects")
        ordering = ["-created"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "title"],
                name="unique_project_title_per_student",
            ),
            # Approval and rejection are exclusive
            models.CheckConstraint(
                condition=~models.Q(approved_at__isnull=False, rejected_at__isnull=False),
                name="project_single_decision",
            ),
            # A draft has not been decided yet
            models.CheckConstraint(
                condition=(
                    ~models.Q(status=ProjectStatus.DRAFT)
                    | models.Q(approved_at__isnull=True, rejected_at__isnull=True)
                ),
                name="project_draft_undecided",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    # FSM Transitions

    @transition(field=status, source=ProjectStatus.DRAFT, target=ProjectStatus.APPROVED)
    def approve(self):
        """Accept the title. Called by the reviewing instructor."""
        self.approved_at = timezone.now()

    @transition(field=status, source=ProjectStatus.DRAFT, target=ProjectStatus.REJECTED)
    def reject(self):
        """Refuse the title. Called by the reviewing instructor."""
        self.rejected_at = timezone.now()

    # Helper methods

    @property
    def is_pending(self) -> bool:
        return self.status == ProjectStatus.DRAFT

    def accepts_uploads(self) -> bool:
        """Files may only be uploaded once the title is approved."""
        return self.status == ProjectStatus.APPROVED

    def can_be_viewed_by(self, user) -> bool:
        """Student, reviewing instructor and advisor see the project."""
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return user.id in {self.student_id, self.instructor_id, self.advisor_id}


class ProjectFile(BaseModel):
    """
    Metadata of a file uploaded for a project.

    The bytes live in the configured storage under ``file_path``.
    """

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="files",
        verbose_name=_("project"),
    )
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="uploaded_project_files",
        verbose_name=_("uploaded by"),
    )
    file_path = models.CharField(_("file path"), max_length=500)
    file_name = models.CharField(_("file name"), max_length=255)
    file_type = models.CharField(_("file type"), max_length=100)
    file_size = models.PositiveBigIntegerField(_("file size"))

    class Meta:
        db_table = "project_files"
        verbose_name = _("project file")
        verbose_name_plural = _("project files")
        ordering = ["-created"]

    def __str__(self) -> str:
        return self.file_name

    @property
    def uploaded_at(self):
        return self.created
