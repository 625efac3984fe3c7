import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _
from model_utils.models import TimeStampedModel


class BaseModel(TimeStampedModel):
    """
    Base model with UUID primary key and created/modified timestamps.

    All models should inherit from this class for consistency.
    Provides:
        - id: UUIDField as primary key
        - created: DateTimeField auto-set on creation
        - modified: DateTimeField auto-updated on save
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TenantModel(BaseModel):
    """
    Base model for records owned by a sub-organization.

    Every query made on behalf of a non-superuser is filtered on
    ``sub_organization`` (see organizations.scoping).
    """

    sub_organization = models.ForeignKey(
        "organizations.SubOrganization",
        on_delete=models.CASCADE,
        related_name="%(class)ss",
        verbose_name=_("sub-organization"),
    )

    class Meta:
        abstract = True
