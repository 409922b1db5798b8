"""
Tests for the projects and advisors API controllers.
"""

import pytest

from academia.notifications.models import Notification
from academia.projects.models import Project
from academia.projects.models import ProjectStatus
from academia.projects.tests.factories import ProjectFactory
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import StudentFactory


@pytest.fixture
def project(assignment):
    return ProjectFactory(student=assignment.student, instructor=assignment.instructor, title="Graph coloring")


@pytest.mark.django_db
class TestSubmitTitleEndpoint:
    """Tests for POST /api/projects/."""

    def test_student_submits(self, client_for, assignment, student, instructor):
        response = client_for(student).post(
            "/api/projects/",
            data={"instructor_id": str(instructor.id), "title": "Compilers", "description": "Build one."},
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "draft"
        assert data["student"]["id"] == str(student.id)
        assert data["instructor"]["id"] == str(instructor.id)

    def test_off_roster_instructor(self, client_for, student, department):
        instructor = InstructorFactory(department=department)

        response = client_for(student).post(
            "/api/projects/",
            data={"instructor_id": str(instructor.id), "title": "Compilers"},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"

    def test_duplicate_title(self, client_for, project):
        response = client_for(project.student).post(
            "/api/projects/",
            data={"instructor_id": str(project.instructor_id), "title": "Graph coloring"},
            content_type="application/json",
        )

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_EXISTS"

    def test_instructor_cannot_submit(self, client_for, instructor):
        response = client_for(instructor).post(
            "/api/projects/",
            data={"instructor_id": str(instructor.id), "title": "Compilers"},
            content_type="application/json",
        )

        assert response.status_code == 403


@pytest.mark.django_db
class TestReviewEndpoints:
    """Tests for approve and reject."""

    def test_approve(self, client_for, project):
        response = client_for(project.instructor).post(f"/api/projects/{project.id}/approve")

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["approved_at"] is not None

    def test_double_approve(self, client_for, project):
        client = client_for(project.instructor)
        client.post(f"/api/projects/{project.id}/approve")

        response = client.post(f"/api/projects/{project.id}/approve")

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_PENDING"
        assert response.json()["details"] == {"status": "approved"}

    def test_reject_with_reason(self, client_for, project):
        response = client_for(project.instructor).post(
            f"/api/projects/{project.id}/reject",
            data={"reason": "Too broad"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"
        assert "Reason: Too broad" in Notification.objects.get(user=project.student).message

    def test_student_cannot_approve(self, client_for, project):
        response = client_for(project.student).post(f"/api/projects/{project.id}/approve")

        assert response.status_code == 403
        assert Project.objects.get(id=project.id).status == ProjectStatus.DRAFT

    def test_pending_list(self, client_for, project):
        response = client_for(project.instructor).get("/api/projects/pending")

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data] == [str(project.id)]
        assert data[0]["days_pending"] == 0

    def test_request_titles(self, client_for, assignment, instructor, student):
        response = client_for(instructor).post(
            "/api/projects/title-requests",
            data={"student_ids": [str(student.id)]},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert Notification.objects.get().user_id == student.id


@pytest.mark.django_db
class TestReadEndpoints:
    """Tests for project reads."""

    def test_list_for_student(self, client_for, project):
        response = client_for(project.student).get("/api/projects/")

        assert [p["id"] for p in response.json()] == [str(project.id)]

    def test_list_for_department_head(self, client_for, department_head):
        response = client_for(department_head).get("/api/projects/")

        assert response.status_code == 403

    def test_status_for_owner(self, client_for, project):
        response = client_for(project.student).get(f"/api/projects/{project.id}/status")

        assert response.status_code == 200
        assert response.json()["instructor_email"] == project.instructor.email

    def test_status_for_other_student(self, client_for, project, department):
        response = client_for(StudentFactory(department=department)).get(f"/api/projects/{project.id}/status")

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_OWNER"

    def test_detail_for_department_head(self, client_for, project, department_head):
        response = client_for(department_head).get(f"/api/projects/{project.id}")

        assert response.status_code == 200

    def test_detail_for_outsider(self, client_for, project):
        response = client_for(StudentFactory()).get(f"/api/projects/{project.id}")

        assert response.status_code == 403

    def test_detail_unknown(self, client_for, student):
        response = client_for(student).get("/api/projects/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404


@pytest.mark.django_db
class TestAdvisorEndpoints:
    """Tests for /api/advisors."""

    def test_assign_and_remove(self, client_for, project, department_head, department):
        advisor = InstructorFactory(department=department)
        client = client_for(department_head)

        assigned = client.post(
            f"/api/advisors/projects/{project.id}",
            data={"advisor_id": str(advisor.id)},
            content_type="application/json",
        )
        removed = client.delete(f"/api/advisors/projects/{project.id}")

        assert assigned.status_code == 200
        assert assigned.json()["advisor"]["id"] == str(advisor.id)
        assert removed.status_code == 200
        assert removed.json()["advisor"] is None

    def test_assign_twice_conflicts(self, client_for, project, department_head, department):
        advisor = InstructorFactory(department=department)
        client = client_for(department_head)
        payload = {"advisor_id": str(advisor.id)}

        client.post(f"/api/advisors/projects/{project.id}", data=payload, content_type="application/json")
        response = client.post(f"/api/advisors/projects/{project.id}", data=payload, content_type="application/json")

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_ASSIGNED"

    def test_instructor_cannot_assign(self, client_for, project, instructor):
        response = client_for(instructor).post(
            f"/api/advisors/projects/{project.id}",
            data={"advisor_id": str(instructor.id)},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert Project.objects.get(id=project.id).advisor_id is None

    def test_views(self, client_for, project, department_head):
        client = client_for(department_head)

        instructors = client.get("/api/advisors/instructors")
        unassigned = client.get("/api/advisors/projects/unassigned")
        everything = client.get("/api/advisors/projects")

        assert [i["id"] for i in instructors.json()] == [str(project.instructor_id)]
        assert [p["id"] for p in unassigned.json()] == [str(project.id)]
        assert everything.json()[0]["evaluation_count"] == 0
