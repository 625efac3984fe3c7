from datetime import timedelta

from django.utils import timezone
from factory import Faker
from factory import LazyAttribute
from factory import LazyFunction
from factory import Sequence
from factory import SubFactory
from factory.django import DjangoModelFactory

from training_backend.organizations.tests.factories import SubOrganizationFactory
from training_backend.projects.models import Event
from training_backend.projects.models import Instructor
from training_backend.projects.models import Participant
from training_backend.projects.models import Project


class InstructorFactory(DjangoModelFactory[Instructor]):
    sub_organization = SubFactory(SubOrganizationFactory)
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    email = Sequence(lambda n: f"instructor{n}@example.com")

    class Meta:
        model = Instructor


class ParticipantFactory(DjangoModelFactory[Participant]):
    sub_organization = SubFactory(SubOrganizationFactory)
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    email = Sequence(lambda n: f"participant{n}@example.com")
    company = Faker("company")

    class Meta:
        model = Participant


class ProjectFactory(DjangoModelFactory[Project]):
    sub_organization = SubFactory(SubOrganizationFactory)
    title = Sequence(lambda n: f"Project {n}")
    summary = Faker("sentence")
    start_date = LazyFunction(lambda: timezone.localdate())
    end_date = LazyAttribute(lambda o: o.start_date + timedelta(days=30) if o.start_date else None)

    class Meta:
        model = Project


class EventFactory(DjangoModelFactory[Event]):
    project = SubFactory(ProjectFactory)
    title = Sequence(lambda n: f"Session {n}")
    start = LazyFunction(lambda: timezone.now() + timedelta(days=1))
    end = LazyAttribute(lambda o: o.start + timedelta(hours=2))

    class Meta:
        model = Event
