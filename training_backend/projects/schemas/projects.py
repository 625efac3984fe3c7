"""
Project schemas for API requests and responses.
"""

import re
from datetime import date
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from training_backend.projects.schemas.people import InstructorMinimalSchema
from training_backend.projects.schemas.people import ParticipantMinimalSchema

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

PROJECT_ACTIONS = ("start", "complete", "cancel", "reopen")


def check_color(v: str | None) -> str | None:
    """Accept an empty value or a #RRGGBB color."""
    if not v:
        return v
    if not HEX_COLOR_RE.match(v):
        raise ValueError("Color must be formatted as #RRGGBB.")
    return v.lower()


class ProjectListSchema(Schema):
    """Schema for project list view."""

    id: UUID
    title: str
    summary: str
    project_type: str
    project_category: str
    status: str
    color: str
    start_date: date | None
    end_date: date | None
    duration: int | None
    tags: list[str]
    instructors: list[InstructorMinimalSchema]
    created: datetime
    modified: datetime


class ProjectDetailSchema(ProjectListSchema):
    """Detailed project schema with roster and schedule size."""

    participants: list[ParticipantMinimalSchema]
    event_count: int
    created_by_id: UUID | None


class ProjectCreateSchema(Schema):
    """Schema for creating a project."""

    title: str
    summary: str = ""
    project_type: str = ""
    project_category: str = ""
    color: str = ""
    start_date: date | None = None
    end_date: date | None = None
    duration: int | None = Field(default=None, ge=1)
    tags: list[str] = []
    instructor_ids: list[UUID] = []
    participant_ids: list[UUID] = []

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Title is required.")
        return v.strip()

    @field_validator("color")
    @classmethod
    def valid_color(cls, v: str) -> str:
        return check_color(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag and tag.strip()]

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be on or after the start date.")
        return self


class ProjectUpdateSchema(Schema):
    """Schema for updating a project, every field optional."""

    title: str | None = None
    summary: str | None = None
    project_type: str | None = None
    project_category: str | None = None
    color: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    duration: int | None = Field(default=None, ge=1)
    tags: list[str] | None = None
    instructor_ids: list[UUID] | None = None
    participant_ids: list[UUID] | None = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty.")
        return v.strip() if v is not None else v

    @field_validator("color")
    @classmethod
    def valid_color(cls, v: str | None) -> str | None:
        return check_color(v)


class ProjectStatusActionSchema(Schema):
    """Schema for a status transition."""

    action: str

    @field_validator("action")
    @classmethod
    def valid_action(cls, v: str) -> str:
        if v not in PROJECT_ACTIONS:
            raise ValueError(f"Invalid action. Choices: {', '.join(PROJECT_ACTIONS)}")
        return v
