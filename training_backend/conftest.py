import pytest
from django.contrib.auth.models import Group
from django.test import Client

from training_backend.core.roles import Role
from training_backend.organizations.models import SubOrganization
from training_backend.organizations.tests.factories import SubOrganizationFactory
from training_backend.users.models import User
from training_backend.users.tests.factories import UserFactory

PASSWORD = "testpass123"


@pytest.fixture
def role_groups(db) -> dict[Role, Group]:
    """Role groups, created by a data migration outside of tests."""
    return {role: Group.objects.get_or_create(name=role.value)[0] for role in Role}


@pytest.fixture
def sub_organization(db) -> SubOrganization:
    return SubOrganizationFactory(title="Academy")


@pytest.fixture
def other_sub_organization(db) -> SubOrganization:
    return SubOrganizationFactory(title="Other department")


def make_user(email: str, sub_organization, role_groups, role: Role | None = None, **kwargs) -> User:
    user = UserFactory(email=email, sub_organization=sub_organization, password=PASSWORD, **kwargs)
    if role:
        user.groups.add(role_groups[role])
    return user


@pytest.fixture
def manager_user(sub_organization, role_groups) -> User:
    """Project Manager of the Academy sub-organization."""
    return make_user("manager@test.com", sub_organization, role_groups, Role.PROJECT_MANAGER)


@pytest.fixture
def member_user(sub_organization, role_groups) -> User:
    """Participant of the Academy sub-organization, read-only."""
    return make_user("member@test.com", sub_organization, role_groups, Role.PARTICIPANT)


@pytest.fixture
def outsider_user(other_sub_organization, role_groups) -> User:
    """Project Manager of another sub-organization."""
    return make_user("outsider@test.com", other_sub_organization, role_groups, Role.PROJECT_MANAGER)


def logged_in(user: User) -> Client:
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def manager_client(manager_user) -> Client:
    return logged_in(manager_user)


@pytest.fixture
def member_client(member_user) -> Client:
    return logged_in(member_user)


@pytest.fixture
def outsider_client(outsider_user) -> Client:
    return logged_in(outsider_user)


@pytest.fixture
def anonymous_client() -> Client:
    return Client()
