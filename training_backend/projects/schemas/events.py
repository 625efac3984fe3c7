"""
Event schemas for API requests and responses.
"""

from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

from ninja import Schema
from pydantic import field_validator
from pydantic import model_validator

from training_backend.projects.models import EventStatus
from training_backend.projects.models import EventType
from training_backend.projects.schemas.people import InstructorMinimalSchema
from training_backend.projects.schemas.people import ParticipantMinimalSchema
from training_backend.projects.schemas.projects import check_color


def check_timezone(v: str) -> str:
    try:
        ZoneInfo(v)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {v}") from None
    return v


def check_choice(v: str, choices) -> str:
    valid = [choice.value for choice in choices]
    if v not in valid:
        raise ValueError(f"Invalid value. Choices: {', '.join(valid)}")
    return v


class EventSchema(Schema):
    """Event response schema."""

    id: UUID
    project_id: UUID
    title: str
    description: str
    event_type: str
    status: str
    start: datetime
    end: datetime
    all_day: bool
    location: str
    timezone: str
    color: str
    instructors: list[InstructorMinimalSchema]
    attendees: list[ParticipantMinimalSchema]
    created: datetime
    modified: datetime


class EventCreateSchema(Schema):
    """Schema for scheduling an event in a project."""

    project_id: UUID
    title: str
    description: str = ""
    event_type: str = EventType.CLASS
    status: str = EventStatus.SCHEDULED
    start: datetime
    end: datetime
    all_day: bool = False
    location: str = ""
    timezone: str = "UTC"
    color: str = ""
    instructor_ids: list[UUID] = []
    attendee_ids: list[UUID] = []

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Title is required.")
        return v.strip()

    @field_validator("event_type")
    @classmethod
    def valid_event_type(cls, v: str) -> str:
        return check_choice(v, EventType)

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        return check_choice(v, EventStatus)

    @field_validator("timezone")
    @classmethod
    def valid_timezone(cls, v: str) -> str:
        return check_timezone(v)

    @field_validator("color")
    @classmethod
    def valid_color(cls, v: str) -> str:
        return check_color(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end <= self.start:
            raise ValueError("End must be after start.")
        return self


class EventUpdateSchema(Schema):
    """Schema for updating an event, every field optional."""

    title: str | None = None
    description: str | None = None
    event_type: str | None = None
    status: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    all_day: bool | None = None
    location: str | None = None
    timezone: str | None = None
    color: str | None = None
    instructor_ids: list[UUID] | None = None
    attendee_ids: list[UUID] | None = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty.")
        return v.strip() if v is not None else v

    @field_validator("event_type")
    @classmethod
    def valid_event_type(cls, v: str | None) -> str | None:
        return check_choice(v, EventType) if v is not None else v

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str | None) -> str | None:
        return check_choice(v, EventStatus) if v is not None else v

    @field_validator("timezone")
    @classmethod
    def valid_timezone(cls, v: str | None) -> str | None:
        return check_timezone(v) if v is not None else v

    @field_validator("color")
    @classmethod
    def valid_color(cls, v: str | None) -> str | None:
        return check_color(v)


class InviteQueuedSchema(Schema):
    """Response of the send-invites endpoint."""

    success: bool
    task_id: str | None = None
    attendee_count: int
