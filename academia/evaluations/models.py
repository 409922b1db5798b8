"""
Models for project evaluations.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from academia.core.models import BaseModel

MIN_SCORE = Decimal("0")
MAX_SCORE = Decimal("100")
MIN_FEEDBACK_LENGTH = 10


class EvaluationType(models.TextChoices):
    PROPOSAL = "proposal", _("Proposal")
    PROJECT_PROGRESS = "project_progress", _("Project Progress")
    FINAL_PROJECT = "final_project", _("Final Project")
    TUTORIAL_ASSIGNMENT = "tutorial_assignment", _("Tutorial Assignment")


class EvaluationStatus(models.TextChoices):
    """Outcome of an evaluation. Values are stored as displayed."""

    APPROVED = "Approved", _("Approved")
    NEEDS_REVISION = "Needs Revision", _("Needs Revision")
    REJECTED = "Rejected", _("Rejected")


class Evaluation(BaseModel):
    """
    A scored assessment of a project by an instructor.

    ``student`` is copied from the project when the evaluation is created
    and is never derived again. ``project``, ``student`` and ``instructor``
    do not change afterwards.
    """

    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="evaluations",
        verbose_name=_("project"),
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="evaluations_received",
        verbose_name=_("student"),
    )
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="evaluations_given",
        verbose_name=_("instructor"),
    )
    evaluation_type = models.CharField(
        _("evaluation type"),
        max_length=30,
        choices=EvaluationType.choices,
    )
    score = models.DecimalField(
        _("score"),
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(MIN_SCORE), MaxValueValidator(MAX_SCORE)],
    )
    feedback = models.TextField(_("feedback"))
    recommendation = models.TextField(_("recommendation"))
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=EvaluationStatus.choices,
    )

    class Meta:
        db_table = "evaluations"
        verbose_name = _("evaluation")
        verbose_name_plural = _("evaluations")
        ordering = ["-created"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(score__gte=0, score__lte=100),
                name="evaluation_score_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.get_evaluation_type_display()} of {self.project_id}: {self.score}"
