"""
Sub-organization scoping of querysets.

A non-superuser only ever sees rows of their own sub-organization. Rows of
other tenants are reported as missing, never as forbidden, so that their
existence is not revealed.
"""

import logging

from django.db.models import Model, QuerySet

from training_backend.core.exceptions import NoOrganizationError, NotFoundError

logger = logging.getLogger(__name__)


def scope_queryset(queryset: QuerySet, user, field: str = "sub_organization") -> QuerySet:
    """
    Restrict ``queryset`` to the user's sub-organization.

    Args:
        queryset: Queryset to filter
        user: Django User instance
        field: Lookup path from the queryset model to its SubOrganization
               (e.g. "project__sub_organization" for events)
    """
    if not user or not user.is_authenticated:
        return queryset.none()
    if user.is_superuser:
        return queryset

    sub_organization_id = getattr(user, "sub_organization_id", None)
    if sub_organization_id is None:
        return queryset.none()
    return queryset.filter(**{f"{field}_id": sub_organization_id})


def get_scoped_object(
    queryset: QuerySet,
    user,
    field: str = "sub_organization",
    message: str | None = None,
    **lookup,
) -> Model:
    """
    Fetch one object visible to the user.

    Raises:
        NotFoundError: if the object doesn't exist or belongs to another tenant
    """
    obj = scope_queryset(queryset, user, field).filter(**lookup).first()
    if obj is None:
        logger.debug("%s %s not visible to user %s", queryset.model.__name__, lookup, user.pk)
        raise NotFoundError(message)
    return obj


def require_sub_organization(user):
    """
    Return the sub-organization new records of this user are created in.

    Raises:
        NoOrganizationError: if the user isn't attached to a sub-organization
    """
    sub_organization = getattr(user, "sub_organization", None)
    if sub_organization is None:
        raise NoOrganizationError()
    return sub_organization
