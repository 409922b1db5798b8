"""
Tests for the evaluations API controller.
"""

import pytest

from academia.evaluations.models import Evaluation
from academia.evaluations.tests.factories import EvaluationFactory
from academia.projects.tests.factories import ProjectFactory
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import StudentFactory

PAYLOAD = {
    "evaluation_type": "proposal",
    "score": "72.5",
    "feedback": "Well scoped and feasible.",
    "recommendation": "Start with the data model.",
    "status": "Needs Revision",
}


@pytest.fixture
def project(assignment):
    return ProjectFactory(student=assignment.student, instructor=assignment.instructor, approved=True)


@pytest.mark.django_db
class TestCreateEndpoint:
    """Tests for POST /api/evaluations/."""

    def test_instructor_evaluates(self, client_for, project):
        response = client_for(project.instructor).post(
            "/api/evaluations/",
            data={"project_id": str(project.id), **PAYLOAD},
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["student_id"] == str(project.student_id)
        assert data["evaluation_type_label"] == "Proposal"
        assert data["status"] == "Needs Revision"

    def test_score_out_of_range(self, client_for, project):
        response = client_for(project.instructor).post(
            "/api/evaluations/",
            data={"project_id": str(project.id), **PAYLOAD, "score": 101},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "score", "min": 0, "max": 100}
        assert Evaluation.objects.count() == 0

    def test_off_roster_instructor(self, client_for, project, department):
        response = client_for(InstructorFactory(department=department)).post(
            "/api/evaluations/",
            data={"project_id": str(project.id), **PAYLOAD},
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_student_cannot_evaluate(self, client_for, project):
        response = client_for(project.student).post(
            "/api/evaluations/",
            data={"project_id": str(project.id), **PAYLOAD},
            content_type="application/json",
        )

        assert response.status_code == 403


@pytest.mark.django_db
class TestEvaluationEndpoints:
    """Tests for reading, patching and deleting evaluations."""

    def test_patch(self, client_for):
        evaluation = EvaluationFactory()

        response = client_for(evaluation.instructor).patch(
            f"/api/evaluations/{evaluation.id}",
            data={"status": "Rejected"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Rejected"
        assert response.json()["feedback"] == evaluation.feedback

    def test_patch_by_other_instructor(self, client_for):
        evaluation = EvaluationFactory()

        response = client_for(InstructorFactory()).patch(
            f"/api/evaluations/{evaluation.id}",
            data={"status": "Rejected"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_OWNER"

    def test_delete(self, client_for):
        evaluation = EvaluationFactory()

        response = client_for(evaluation.instructor).delete(f"/api/evaluations/{evaluation.id}")

        assert response.status_code == 200
        assert Evaluation.objects.count() == 0

    def test_student_reads_own(self, client_for):
        evaluation = EvaluationFactory()
        client = client_for(evaluation.student)

        detail = client.get(f"/api/evaluations/{evaluation.id}")
        listing = client.get(f"/api/evaluations/students/{evaluation.student_id}")

        assert detail.status_code == 200
        assert [e["id"] for e in listing.json()] == [str(evaluation.id)]

    def test_outsider_cannot_read(self, client_for):
        evaluation = EvaluationFactory()
        client = client_for(StudentFactory())

        assert client.get(f"/api/evaluations/{evaluation.id}").status_code == 403
        assert client.get(f"/api/evaluations/students/{evaluation.student_id}").status_code == 403

    def test_project_evaluations(self, client_for):
        evaluation = EvaluationFactory()

        client = client_for(evaluation.project.instructor)

        response = client.get(f"/api/evaluations/projects/{evaluation.project_id}")

        assert [e["id"] for e in response.json()] == [str(evaluation.id)]

    def test_permission_check(self, client_for, project):
        response = client_for(project.instructor).get(f"/api/evaluations/permission/{project.id}")

        assert response.json() == {"can_evaluate": True}


@pytest.mark.django_db
class TestMonitoringEndpoints:
    """Tests for the department head views."""

    def test_statistics(self, client_for, project, department_head):
        EvaluationFactory(project=project)

        response = client_for(department_head).get("/api/evaluations/statistics")

        assert response.status_code == 200
        assert response.json()["total_evaluations"] == 1

    def test_statistics_by_type(self, client_for, project, department_head):
        EvaluationFactory(project=project)

        response = client_for(department_head).get("/api/evaluations/statistics/types")

        assert [r["evaluation_type"] for r in response.json()] == ["proposal"]

    def test_instructor_performance(self, client_for, project, department_head):
        EvaluationFactory(project=project)

        response = client_for(department_head).get("/api/evaluations/instructor-performance")

        assert response.status_code == 200
        assert response.json()[0]["evaluations_completed"] == 1

    def test_instructor_cannot_monitor(self, client_for, instructor):
        assert client_for(instructor).get("/api/evaluations/statistics").status_code == 403
