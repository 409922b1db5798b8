"""
Evaluation schemas.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ninja import Schema

from academia.core.schemas import BaseSchema
from academia.core.schemas import UserSummarySchema
from academia.evaluations.models import Evaluation
from academia.evaluations.monitoring import EvaluationStatistics
from academia.users.models import User


class EvaluationCreateSchema(Schema):
    """Schema for recording an evaluation. Ranges are checked by the service."""

    project_id: UUID
    evaluation_type: str
    score: Decimal
    feedback: str
    recommendation: str
    status: str


class EvaluationUpdateSchema(Schema):
    """Partial update, only the fields sent are validated and written."""

    evaluation_type: str | None = None
    score: Decimal | None = None
    feedback: str | None = None
    recommendation: str | None = None
    status: str | None = None


class EvaluationSchema(BaseSchema):
    """Evaluation response schema."""

    project_id: UUID
    student_id: UUID
    instructor: UserSummarySchema
    evaluation_type: str
    evaluation_type_label: str
    score: Decimal
    feedback: str
    recommendation: str
    status: str

    @staticmethod
    def from_evaluation(evaluation: Evaluation) -> "EvaluationSchema":
        return EvaluationSchema(
            id=evaluation.id,
            created=evaluation.created,
            modified=evaluation.modified,
            project_id=evaluation.project_id,
            student_id=evaluation.student_id,
            instructor=UserSummarySchema.from_user(evaluation.instructor),
            evaluation_type=evaluation.evaluation_type,
            evaluation_type_label=str(evaluation.get_evaluation_type_display()),
            score=evaluation.score,
            feedback=evaluation.feedback,
            recommendation=evaluation.recommendation,
            status=evaluation.status,
        )


class EvaluationStatisticsSchema(Schema):
    total_evaluations: int
    total_projects: int
    total_students: int
    total_instructors: int
    average_score: Decimal | None = None
    min_score: Decimal | None = None
    max_score: Decimal | None = None
    pending_projects: int
    approved_projects: int
    rejected_projects: int

    @staticmethod
    def from_statistics(stats: EvaluationStatistics) -> "EvaluationStatisticsSchema":
        return EvaluationStatisticsSchema(**stats.as_dict())


class EvaluationTypeStatisticsSchema(Schema):
    evaluation_type: str
    count: int
    average_score: Decimal | None = None
    min_score: Decimal | None = None
    max_score: Decimal | None = None


class InstructorPerformanceSchema(Schema):
    """An instructor's roster size and evaluation record."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    assigned_students: int
    evaluations_completed: int
    average_evaluation_score: Decimal | None = None
    approved_projects: int
    rejected_projects: int
    date_joined: datetime

    @staticmethod
    def from_user(user: User) -> "InstructorPerformanceSchema":
        average = user.average_evaluation_score
        return InstructorPerformanceSchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            assigned_students=user.assigned_students,
            evaluations_completed=user.evaluations_completed,
            average_evaluation_score=Decimal(average).quantize(Decimal("0.01")) if average is not None else None,
            approved_projects=user.approved_projects,
            rejected_projects=user.rejected_projects,
            date_joined=user.date_joined,
        )
