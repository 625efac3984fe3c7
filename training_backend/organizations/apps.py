"""Organizations app configuration."""

from django.apps import AppConfig


class OrganizationsConfig(AppConfig):
    """Configuration for the organizations app."""

    name = "training_backend.organizations"
    verbose_name = "Organizations"
