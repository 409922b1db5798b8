"""
Evaluation manager.

Only an instructor on the student's roster may evaluate a project. The roster
check is independent of who reviewed the title or advises the project.
"""

import logging
from decimal import Decimal
from decimal import InvalidOperation
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import transaction

from academia.core.exceptions import NotFoundError
from academia.core.exceptions import NotOwnerError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.core.workflow import Outcome
from academia.evaluations.models import MAX_SCORE
from academia.evaluations.models import MIN_FEEDBACK_LENGTH
from academia.evaluations.models import MIN_SCORE
from academia.evaluations.models import Evaluation
from academia.evaluations.models import EvaluationStatus
from academia.evaluations.models import EvaluationType
from academia.notifications.dispatcher import NotificationDispatcher
from academia.notifications.dispatcher import NotificationIntent
from academia.notifications.models import NotificationType
from academia.projects.models import Project
from academia.users.roster import RosterAuthority

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("evaluation_type", "score", "feedback", "recommendation", "status")


def clean_score(value) -> Decimal:
    try:
        score = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        score = None
    if score is None or not score.is_finite():
        raise ValidationError("Score must be a number.", field="score", min=0, max=100)
    if score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError("Score must be between 0 and 100.", field="score", min=0, max=100)
    return score


def clean_feedback(value) -> str:
    if not isinstance(value, str) or len(value) < MIN_FEEDBACK_LENGTH:
        raise ValidationError(
            f"Feedback must be at least {MIN_FEEDBACK_LENGTH} characters long.",
            field="feedback",
            min_length=MIN_FEEDBACK_LENGTH,
        )
    return value


def clean_recommendation(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Recommendation is required.", field="recommendation", min_length=1)
    return value


def clean_evaluation_type(value) -> str:
    if value not in EvaluationType.values:
        raise ValidationError(
            "Invalid evaluation type.",
            field="evaluation_type",
            allowed=list(EvaluationType.values),
        )
    return value


def clean_status(value) -> str:
    if value not in EvaluationStatus.values:
        raise ValidationError(
            "Invalid evaluation status.",
            field="status",
            allowed=list(EvaluationStatus.values),
        )
    return value


CLEANERS = {
    "evaluation_type": clean_evaluation_type,
    "score": clean_score,
    "feedback": clean_feedback,
    "recommendation": clean_recommendation,
    "status": clean_status,
}


def clean_fields(values: dict) -> dict:
    """Validate the given fields, in a fixed order, with the creation rules."""
    return {name: CLEANERS[name](values[name]) for name in EDITABLE_FIELDS if name in values}


class EvaluationService:
    """Records and maintains project evaluations."""

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
    def evaluations(self):
        return Evaluation.objects.using(self.using)

    def _get_project(self, project_id: UUID) -> Project:
        try:
            return Project.objects.using(self.using).get(id=project_id)
        except Project.DoesNotExist:
            raise NotFoundError("Project not found.") from None

    def verify_evaluation_permission(self, instructor_id: UUID, project_id: UUID) -> bool:
        """True when the instructor has the project's student on their roster."""
        student_id = Project.objects.using(self.using).filter(id=project_id).values_list("student_id", flat=True).first()
        if student_id is None:
            return False
        return self.roster.is_instructor_assigned_to_student(instructor_id, student_id)

    def create_evaluation(
        self,
        project_id: UUID,
        instructor_id: UUID,
        evaluation_type: str,
        score,
        feedback: str,
        recommendation: str,
        status: str,
    ) -> Outcome[Evaluation]:
        """Validate and record an evaluation, then notify the student."""
        project = self._get_project(project_id)
        if not self.roster.is_instructor_assigned_to_student(instructor_id, project.student_id):
            raise PermissionDeniedError("Instructor is not assigned to this student.")

        fields = clean_fields(
            {
                "evaluation_type": evaluation_type,
                "score": score,
                "feedback": feedback,
                "recommendation": recommendation,
                "status": status,
            }
        )

        with transaction.atomic(using=self.using):
            evaluation = self.evaluations.create(
                project_id=project.id,
                student_id=project.student_id,
                instructor_id=instructor_id,
                **fields,
            )
            notifications = self.dispatcher.dispatch(
                [
                    NotificationIntent(
                        user_id=project.student_id,
                        title="Evaluation Completed",
                        message=(
                            "Your project has been evaluated. "
                            f"Type: {evaluation.get_evaluation_type_display()}, Status: {evaluation.status}"
                        ),
                        type=NotificationType.EVALUATION_COMPLETE,
                    )
                ]
            )

        logger.info("Evaluation %s recorded for project %s by %s", evaluation.id, project.id, instructor_id)
        return Outcome(evaluation, tuple(notifications))

    def get_evaluation(self, evaluation_id: UUID) -> Evaluation:
        try:
            return self.evaluations.select_related("project", "student", "instructor").get(id=evaluation_id)
        except Evaluation.DoesNotExist:
            raise NotFoundError("Evaluation not found.") from None

    def update_evaluation(self, evaluation_id: UUID, changes: dict, instructor_id: UUID | None = None) -> Evaluation:
        """
        Apply a partial update.

        Only the fields present in ``changes`` are validated and written.
        ``project``, ``student`` and ``instructor`` cannot be changed. When
        ``instructor_id`` is given it must be the evaluation's author.
        """
        for name in changes:
            if name not in EDITABLE_FIELDS:
                raise ValidationError(f"Field {name} cannot be changed.", field=name, allowed=list(EDITABLE_FIELDS))

        with transaction.atomic(using=self.using):
            try:
                evaluation = self.evaluations.select_for_update().get(id=evaluation_id)
            except Evaluation.DoesNotExist:
                raise NotFoundError("Evaluation not found.") from None
            if instructor_id is not None and evaluation.instructor_id != instructor_id:
                raise NotOwnerError("Only the evaluating instructor can change this evaluation.")

            fields = clean_fields(changes)
            if not fields:
                return evaluation
            for name, value in fields.items():
                setattr(evaluation, name, value)
            evaluation.save(update_fields=[*fields, "modified"])

        logger.info("Evaluation %s updated: %s", evaluation.id, ", ".join(fields))
        return evaluation

    def delete_evaluation(self, evaluation_id: UUID, instructor_id: UUID | None = None) -> None:
        with transaction.atomic(using=self.using):
            try:
                evaluation = self.evaluations.select_for_update().get(id=evaluation_id)
            except Evaluation.DoesNotExist:
                raise NotFoundError("Evaluation not found.") from None
            if instructor_id is not None and evaluation.instructor_id != instructor_id:
                raise NotOwnerError("Only the evaluating instructor can delete this evaluation.")
            evaluation.delete()

        logger.info("Evaluation %s deleted", evaluation_id)

    def get_student_evaluations(self, student_id: UUID) -> list[Evaluation]:
        """The student's evaluations, newest first."""
        return list(
            self.evaluations.filter(student_id=student_id)
            .select_related("project", "instructor")
            .order_by("-created")
        )

    def get_project_evaluations(self, project_id: UUID) -> list[Evaluation]:
        return list(self.evaluations.filter(project_id=project_id).select_related("instructor").order_by("-created"))
