"""Timeline app configuration."""

from django.apps import AppConfig


class TimelineConfig(AppConfig):
    """Configuration for the timeline app."""

    name = "training_backend.timeline"
    verbose_name = "Timeline"
