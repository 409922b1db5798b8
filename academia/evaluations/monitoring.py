"""
Department monitoring views.

Read-only aggregates for a department head. The department is always taken
from the head's own record. A database failure is logged and the view comes
back empty instead of failing the dashboard.
"""

import logging
from dataclasses import asdict
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db import DatabaseError
from django.db.models import Avg
from django.db.models import Count
from django.db.models import Max
from django.db.models import Min
from django.db.models import Q

from academia.core.exceptions import NotFoundError
from academia.core.roles import Role
from academia.evaluations.models import Evaluation
from academia.projects.models import ProjectStatus
from academia.users.models import User

logger = logging.getLogger(__name__)


@dataclass
class EvaluationStatistics:
    total_evaluations: int = 0
    total_projects: int = 0
    total_students: int = 0
    total_instructors: int = 0
    average_score: Decimal | None = None
    min_score: Decimal | None = None
    max_score: Decimal | None = None
    pending_projects: int = 0
    approved_projects: int = 0
    rejected_projects: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def _rounded(value) -> Decimal | None:
    if value is None:
        return None
    return Decimal(value).quantize(Decimal("0.01"))


class DepartmentMonitor:
    """Evaluation statistics and instructor performance for one department."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def _department_id(self, department_head_id: UUID) -> UUID | None:
        try:
            head = User.objects.using(self.using).get(id=department_head_id)
        except User.DoesNotExist:
            raise NotFoundError("Department head not found.") from None
        return head.department_id

    def evaluation_statistics(self, department_head_id: UUID) -> EvaluationStatistics:
        """Totals and score range of the department's evaluations."""
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return EvaluationStatistics()

        try:
            totals = (
                Evaluation.objects.using(self.using)
                .filter(project__student__department_id=department_id)
                .aggregate(
                    total_evaluations=Count("id", distinct=True),
                    total_projects=Count("project", distinct=True),
                    total_students=Count("student", distinct=True),
                    total_instructors=Count("instructor", distinct=True),
                    average_score=Avg("score"),
                    min_score=Min("score"),
                    max_score=Max("score"),
                    pending_projects=Count("project", distinct=True, filter=Q(project__status=ProjectStatus.DRAFT)),
                    approved_projects=Count(
                        "project", distinct=True, filter=Q(project__status=ProjectStatus.APPROVED)
                    ),
                    rejected_projects=Count(
                        "project", distinct=True, filter=Q(project__status=ProjectStatus.REJECTED)
                    ),
                )
            )
        except DatabaseError:
            logger.exception("Error computing evaluation statistics for %s", department_head_id)
            return EvaluationStatistics()

        totals["average_score"] = _rounded(totals["average_score"])
        return EvaluationStatistics(**totals)

    def statistics_by_type(self, department_head_id: UUID) -> list[dict]:
        """Count and score range per evaluation type."""
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return []

        try:
            rows = list(
                Evaluation.objects.using(self.using)
                .filter(project__student__department_id=department_id)
                .values("evaluation_type")
                .annotate(
                    count=Count("id"),
                    average_score=Avg("score"),
                    min_score=Min("score"),
                    max_score=Max("score"),
                )
                .order_by("evaluation_type")
            )
        except DatabaseError:
            logger.exception("Error computing evaluation type statistics for %s", department_head_id)
            return []

        for row in rows:
            row["average_score"] = _rounded(row["average_score"])
        return rows

    def instructor_performance(self, department_head_id: UUID) -> list[User]:
        """
        Department instructors annotated with their roster and evaluation work.

        Each instructor carries ``assigned_students``, ``evaluations_completed``,
        ``average_evaluation_score``, ``approved_projects`` and
        ``rejected_projects``. Busiest evaluators come first.
        """
        department_id = self._department_id(department_head_id)
        if department_id is None:
            return []

        try:
            return list(
                User.objects.using(self.using)
                .filter(role=Role.INSTRUCTOR.value, department_id=department_id)
                .annotate(
                    assigned_students=Count(
                        "roster_students__student",
                        filter=Q(
                            roster_students__is_active=True,
                            roster_students__student__department_id=department_id,
                        ),
                        distinct=True,
                    ),
                    evaluations_completed=Count("evaluations_given", distinct=True),
                    average_evaluation_score=Avg("evaluations_given__score"),
                    approved_projects=Count(
                        "reviewed_projects",
                        filter=Q(reviewed_projects__status=ProjectStatus.APPROVED),
                        distinct=True,
                    ),
                    rejected_projects=Count(
                        "reviewed_projects",
                        filter=Q(reviewed_projects__status=ProjectStatus.REJECTED),
                        distinct=True,
                    ),
                )
                .order_by("-evaluations_completed", "first_name", "last_name")
            )
        except DatabaseError:
            logger.exception("Error computing instructor performance for %s", department_head_id)
            return []
