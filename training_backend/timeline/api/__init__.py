"""
Timeline API controllers.
"""

from training_backend.timeline.api.timeline import TimelineController

__all__ = [
    "TimelineController",
]
