"""
Instructor and participant schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

from training_backend.projects.models import Instructor
from training_backend.projects.models import InstructorType
from training_backend.projects.models import Participant


class InstructorMinimalSchema(Schema):
    """Minimal instructor information for references."""

    id: UUID
    full_name: str
    instructor_type: str

    @staticmethod
    def from_instructor(instructor: Instructor) -> "InstructorMinimalSchema":
        return InstructorMinimalSchema(
            id=instructor.id,
            full_name=instructor.full_name,
            instructor_type=instructor.instructor_type,
        )


class InstructorSchema(Schema):
    """Instructor response schema."""

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    instructor_type: str
    created: datetime
    modified: datetime

    @staticmethod
    def from_instructor(instructor: Instructor) -> "InstructorSchema":
        return InstructorSchema(
            id=instructor.id,
            first_name=instructor.first_name,
            last_name=instructor.last_name,
            full_name=instructor.full_name,
            email=instructor.email,
            instructor_type=instructor.instructor_type,
            created=instructor.created,
            modified=instructor.modified,
        )


class InstructorCreateSchema(Schema):
    """Schema for creating an instructor."""

    first_name: str
    last_name: str = ""
    email: EmailStr | None = None
    instructor_type: str = InstructorType.MAIN

    @field_validator("first_name")
    @classmethod
    def first_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("First name is required.")
        return v.strip()

    @field_validator("instructor_type")
    @classmethod
    def valid_instructor_type(cls, v: str) -> str:
        valid_types = [choice.value for choice in InstructorType]
        if v not in valid_types:
            raise ValueError(f"Invalid instructor type. Choices: {', '.join(valid_types)}")
        return v


class ParticipantMinimalSchema(Schema):
    """Minimal participant information for references."""

    id: UUID
    full_name: str
    email: str

    @staticmethod
    def from_participant(participant: Participant) -> "ParticipantMinimalSchema":
        return ParticipantMinimalSchema(
            id=participant.id,
            full_name=participant.full_name,
            email=participant.email,
        )


class ParticipantSchema(Schema):
    """Participant response schema."""

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    company: str
    created: datetime
    modified: datetime

    @staticmethod
    def from_participant(participant: Participant) -> "ParticipantSchema":
        return ParticipantSchema(
            id=participant.id,
            first_name=participant.first_name,
            last_name=participant.last_name,
            full_name=participant.full_name,
            email=participant.email,
            company=participant.company,
            created=participant.created,
            modified=participant.modified,
        )


class ParticipantCreateSchema(Schema):
    """Schema for creating a participant."""

    first_name: str
    last_name: str = ""
    email: EmailStr | None = None
    company: str = ""

    @field_validator("first_name")
    @classmethod
    def first_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("First name is required.")
        return v.strip()
