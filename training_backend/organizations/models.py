"""
Models for tenants.

Contains:
- Organization: Customer account
- SubOrganization: Department inside an organization, the data scope of users
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from training_backend.core.models import BaseModel


class OrganizationStatus(models.TextChoices):
    """Status choices for organizations."""

    ACTIVE = "active", _("Active")
    INACTIVE = "inactive", _("Inactive")


class Organization(BaseModel):
    """
    Customer organization.

    Inherits from BaseModel:
        - id: UUID primary key
        - created: auto-set on creation
        - modified: auto-updated on save
    """

    title = models.CharField(
        _("title"),
        max_length=255,
    )
    description = models.TextField(
        _("description"),
        blank=True,
    )
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=OrganizationStatus.choices,
        default=OrganizationStatus.ACTIVE,
    )

    class Meta:
        verbose_name = _("organization")
        verbose_name_plural = _("organizations")
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class SubOrganization(BaseModel):
    """
    Department of an organization.

    Users, projects, instructors and participants belong to exactly one
    sub-organization.
    """

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="sub_organizations",
        verbose_name=_("organization"),
    )
    title = models.CharField(
        _("title"),
        max_length=255,
    )
    description = models.TextField(
        _("description"),
        blank=True,
    )

    class Meta:
        verbose_name = _("sub-organization")
        verbose_name_plural = _("sub-organizations")
        ordering = ["organization__title", "title"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "title"],
                name="unique_sub_organization_title",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.organization.title} / {self.title}"
