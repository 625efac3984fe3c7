"""
Tests for the permission classes.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from training_backend.core.api.permissions import AllowAny
from training_backend.core.api.permissions import IsAuthenticated
from training_backend.users.tests.factories import UserFactory


@pytest.fixture
def request_factory():
    """Return a Django RequestFactory."""
    return RequestFactory()


def make_request(request_factory, user=None):
    """Create a request with the given user."""
    request = request_factory.get("/")
    request.user = user if user else AnonymousUser()
    return request


@pytest.mark.django_db
class TestIsAuthenticated:
    """Tests for IsAuthenticated permission."""

    def test_anonymous_user_denied(self, request_factory):
        request = make_request(request_factory)
        assert IsAuthenticated().has_permission(request, None) is False

    def test_authenticated_user_allowed(self, request_factory):
        request = make_request(request_factory, UserFactory())
        assert IsAuthenticated().has_permission(request, None) is True


class TestAllowAny:
    """Tests for AllowAny permission."""

    def test_anonymous_user_allowed(self, request_factory):
        request = make_request(request_factory)
        assert AllowAny().has_permission(request, None) is True
