"""
End-to-end run of the thesis workflow across services.

A student on one instructor's roster submits a title, gets it approved,
uploads a file and is evaluated. A second instructor off the roster and the
project advisor appointed by the department head cannot evaluate.
"""

import pytest

from academia.core.exceptions import PermissionDeniedError
from academia.evaluations.services import EvaluationService
from academia.notifications.models import Notification
from academia.notifications.models import NotificationType
from academia.projects.models import Project
from academia.projects.models import ProjectStatus
from academia.projects.services import AdvisorAssignmentService
from academia.projects.services import FileUploadGate
from academia.projects.services import ProjectLifecycleService
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import InstructorStudentAssignmentFactory

EVALUATION = {
    "evaluation_type": "final_project",
    "score": 88,
    "feedback": "Thorough implementation and clear write-up.",
    "recommendation": "Publish the results.",
    "status": "Approved",
}


@pytest.mark.django_db
class TestThesisWorkflow:
    """Title, upload, evaluation and advisor steps for one student."""

    def test_full_run(self, department, student, department_head, django_capture_on_commit_callbacks):
        roster_instructor = InstructorFactory(department=department)
        outsider = InstructorFactory(department=department)
        advisor = InstructorFactory(department=department)
        InstructorStudentAssignmentFactory(instructor=roster_instructor, student=student)

        lifecycle = ProjectLifecycleService()
        evaluations = EvaluationService()

        with django_capture_on_commit_callbacks():
            project = lifecycle.submit_title(student.id, roster_instructor.id, "Type inference for Lua").value
            lifecycle.approve_title(project.id, roster_instructor.id)

        assert Project.objects.get(id=project.id).status == ProjectStatus.APPROVED

        project_file = FileUploadGate().upload_project_file(
            project.id, student.id, "projects/report.pdf", "report.pdf", "application/pdf", 2048
        )
        assert project_file.project_id == project.id

        with pytest.raises(PermissionDeniedError):
            evaluations.create_evaluation(project.id, outsider.id, **EVALUATION)

        with django_capture_on_commit_callbacks():
            evaluation = evaluations.create_evaluation(project.id, roster_instructor.id, **EVALUATION).value
            AdvisorAssignmentService().assign_advisor(project.id, advisor.id, department_head.id)

        assert evaluation.student_id == student.id
        assert Project.objects.get(id=project.id).advisor_id == advisor.id

        # Advising a project does not put the student on the advisor's roster.
        assert evaluations.verify_evaluation_permission(advisor.id, project.id) is False
        with pytest.raises(PermissionDeniedError):
            evaluations.create_evaluation(project.id, advisor.id, **EVALUATION)

        student_types = set(Notification.objects.filter(user=student).values_list("type", flat=True))
        assert student_types == {"title_approved", "evaluation_complete", "advisor_assigned"}
        assert Notification.objects.filter(user=roster_instructor, title="New Project Title Submission").exists()
        assert Notification.objects.filter(user=advisor, type=NotificationType.ADVISOR_ASSIGNED).exists()
