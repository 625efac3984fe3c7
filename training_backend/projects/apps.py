"""Projects app configuration."""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """Configuration for the projects app."""

    name = "training_backend.projects"
    verbose_name = "Projects"
