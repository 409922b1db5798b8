from factory import Sequence
from factory import SubFactory
from factory.django import DjangoModelFactory

from academia.notifications.models import Notification
from academia.users.tests.factories import UserFactory


class NotificationFactory(DjangoModelFactory):
    user = SubFactory(UserFactory)
    title = Sequence(lambda n: f"Notice {n}")
    message = "Something happened."

    class Meta:
        model = Notification
