from decimal import Decimal

from factory import SelfAttribute
from factory import SubFactory
from factory.django import DjangoModelFactory

from academia.evaluations.models import Evaluation
from academia.evaluations.models import EvaluationStatus
from academia.evaluations.models import EvaluationType
from academia.projects.tests.factories import ProjectFactory


class EvaluationFactory(DjangoModelFactory):
    project = SubFactory(ProjectFactory, approved=True)
    student = SelfAttribute("project.student")
    instructor = SelfAttribute("project.instructor")
    evaluation_type = EvaluationType.PROPOSAL.value
    score = Decimal("75.00")
    feedback = "Solid proposal with a clear scope."
    recommendation = "Proceed to implementation."
    status = EvaluationStatus.APPROVED.value

    class Meta:
        model = Evaluation
