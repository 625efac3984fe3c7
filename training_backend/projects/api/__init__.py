"""
Projects API controllers.
"""

from training_backend.projects.api.events import EventsController
from training_backend.projects.api.people import InstructorsController
from training_backend.projects.api.people import ParticipantsController
from training_backend.projects.api.projects import ProjectsController

__all__ = [
    "EventsController",
    "InstructorsController",
    "ParticipantsController",
    "ProjectsController",
]
