"""
Tests for the department monitoring views.
"""

from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError

from academia.evaluations.monitoring import DepartmentMonitor
from academia.evaluations.monitoring import EvaluationStatistics
from academia.evaluations.tests.factories import EvaluationFactory
from academia.projects.tests.factories import ProjectFactory
from academia.users.tests.factories import DepartmentHeadFactory
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import InstructorStudentAssignmentFactory
from academia.users.tests.factories import StudentFactory


@pytest.fixture
def monitor():
    return DepartmentMonitor()


@pytest.fixture
def evaluated(assignment):
    """Two evaluations of one approved project and one of a rejected project."""
    approved = ProjectFactory(student=assignment.student, instructor=assignment.instructor, approved=True)
    rejected = ProjectFactory(student=assignment.student, instructor=assignment.instructor, rejected=True)
    EvaluationFactory(project=approved, score=Decimal("60"))
    EvaluationFactory(project=approved, score=Decimal("80"), evaluation_type="final_project")
    EvaluationFactory(project=rejected, score=Decimal("40"))
    return approved, rejected


@pytest.mark.django_db
class TestEvaluationStatistics:
    """Tests for evaluation_statistics."""

    def test_totals(self, monitor, evaluated, department_head):
        EvaluationFactory()

        stats = monitor.evaluation_statistics(department_head.id)

        assert stats.total_evaluations == 3
        assert stats.total_projects == 2
        assert stats.total_students == 1
        assert stats.total_instructors == 1
        assert stats.average_score == Decimal("60.00")
        assert stats.min_score == Decimal("40")
        assert stats.max_score == Decimal("80")
        assert stats.approved_projects == 1
        assert stats.rejected_projects == 1
        assert stats.pending_projects == 0

    def test_empty_department(self, monitor, department_head):
        stats = monitor.evaluation_statistics(department_head.id)

        assert stats == EvaluationStatistics()

    def test_database_error_degrades_to_zero(self, monitor, department_head):
        with mock.patch("academia.evaluations.monitoring.Evaluation.objects") as objects:
            objects.using.side_effect = DatabaseError("gone")
            stats = monitor.evaluation_statistics(department_head.id)

        assert stats == EvaluationStatistics()

    def test_by_type(self, monitor, evaluated, department_head):
        rows = monitor.statistics_by_type(department_head.id)

        assert [(r["evaluation_type"], r["count"]) for r in rows] == [("final_project", 1), ("proposal", 2)]
        assert rows[1]["average_score"] == Decimal("50.00")


@pytest.mark.django_db
class TestInstructorPerformance:
    """Tests for instructor_performance."""

    def test_ranked_by_completed_evaluations(self, monitor, evaluated, assignment, department, department_head):
        idle = InstructorFactory(department=department, first_name="Idle")
        InstructorStudentAssignmentFactory(instructor=idle, student=StudentFactory(department=department))
        InstructorFactory()

        instructors = monitor.instructor_performance(department_head.id)

        assert [i.id for i in instructors] == [assignment.instructor_id, idle.id]
        busy = instructors[0]
        assert busy.assigned_students == 1
        assert busy.evaluations_completed == 3
        assert Decimal(busy.average_evaluation_score).quantize(Decimal("0.01")) == Decimal("60.00")
        assert busy.approved_projects == 1
        assert busy.rejected_projects == 1
        assert instructors[1].evaluations_completed == 0
        assert instructors[1].assigned_students == 1

    def test_head_without_department(self, monitor):
        assert monitor.instructor_performance(DepartmentHeadFactory(department=None).id) == []

    def test_database_error_degrades_to_empty(self, monitor, department_head):
        with mock.patch("academia.evaluations.monitoring.User.objects") as objects:
            objects.using.return_value.get.return_value = department_head
            objects.using.return_value.filter.side_effect = DatabaseError("gone")
            assert monitor.instructor_performance(department_head.id) == []
