from django.utils import timezone
from factory import LazyFunction
from factory import SelfAttribute
from factory import Sequence
from factory import SubFactory
from factory import Trait
from factory.django import DjangoModelFactory

from academia.projects.models import Project
from academia.projects.models import ProjectFile
from academia.projects.models import ProjectStatus
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import StudentFactory


class ProjectFactory(DjangoModelFactory):
    student = SubFactory(StudentFactory)
    instructor = SubFactory(InstructorFactory, department=SelfAttribute("..student.department"))
    title = Sequence(lambda n: f"Project title {n}")
    description = "A project description."
    status = ProjectStatus.DRAFT.value

    class Meta:
        model = Project

    class Params:
        approved = Trait(
            status=ProjectStatus.APPROVED.value,
            approved_at=LazyFunction(timezone.now),
        )
        rejected = Trait(
            status=ProjectStatus.REJECTED.value,
            rejected_at=LazyFunction(timezone.now),
        )


class ProjectFileFactory(DjangoModelFactory):
    project = SubFactory(ProjectFactory, approved=True)
    uploaded_by = SelfAttribute("project.student")
    file_path = Sequence(lambda n: f"projects/files/report-{n}.pdf")
    file_name = Sequence(lambda n: f"report-{n}.pdf")
    file_type = "application/pdf"
    file_size = 2048

    class Meta:
        model = ProjectFile
