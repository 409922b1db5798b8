from factory import SelfAttribute
from factory import Sequence
from factory import SubFactory
from factory.django import DjangoModelFactory

from academia.messaging.models import Message
from academia.users.tests.factories import InstructorFactory
from academia.users.tests.factories import StudentFactory


class MessageFactory(DjangoModelFactory):
    sender = SubFactory(StudentFactory)
    receiver = SubFactory(InstructorFactory, department=SelfAttribute("..sender.department"))
    subject = Sequence(lambda n: f"Subject {n}")
    content = "Hello, do you have time to talk about my project?"

    class Meta:
        model = Message
