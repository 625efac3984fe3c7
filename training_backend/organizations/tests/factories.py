from factory import Sequence
from factory import SubFactory
from factory.django import DjangoModelFactory

from training_backend.organizations.models import Organization
from training_backend.organizations.models import SubOrganization


class OrganizationFactory(DjangoModelFactory[Organization]):
    title = Sequence(lambda n: f"Organization {n}")

    class Meta:
        model = Organization


class SubOrganizationFactory(DjangoModelFactory[SubOrganization]):
    organization = SubFactory(OrganizationFactory)
    title = Sequence(lambda n: f"Department {n}")

    class Meta:
        model = SubOrganization
