"""
Project, event, instructor and participant schemas.
"""

from training_backend.core.schemas import MessageSchema
from training_backend.projects.schemas.events import EventCreateSchema
from training_backend.projects.schemas.events import EventSchema
from training_backend.projects.schemas.events import EventUpdateSchema
from training_backend.projects.schemas.events import InviteQueuedSchema
from training_backend.projects.schemas.people import InstructorCreateSchema
from training_backend.projects.schemas.people import InstructorMinimalSchema
from training_backend.projects.schemas.people import InstructorSchema
from training_backend.projects.schemas.people import ParticipantCreateSchema
from training_backend.projects.schemas.people import ParticipantMinimalSchema
from training_backend.projects.schemas.people import ParticipantSchema
from training_backend.projects.schemas.projects import ProjectCreateSchema
from training_backend.projects.schemas.projects import ProjectDetailSchema
from training_backend.projects.schemas.projects import ProjectListSchema
from training_backend.projects.schemas.projects import ProjectStatusActionSchema
from training_backend.projects.schemas.projects import ProjectUpdateSchema

__all__ = [
    "EventCreateSchema",
    "EventSchema",
    "EventUpdateSchema",
    "InstructorCreateSchema",
    "InstructorMinimalSchema",
    "InstructorSchema",
    "InviteQueuedSchema",
    "MessageSchema",
    "ParticipantCreateSchema",
    "ParticipantMinimalSchema",
    "ParticipantSchema",
    "ProjectCreateSchema",
    "ProjectDetailSchema",
    "ProjectListSchema",
    "ProjectStatusActionSchema",
    "ProjectUpdateSchema",
]
