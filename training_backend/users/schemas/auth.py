"""
Authentication schemas for login, profile and password change.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr
from pydantic import field_validator

if TYPE_CHECKING:
    from training_backend.users.models import User


class LoginSchema(Schema):
    """Login request schema."""

    email: EmailStr
    password: str


class UserSchema(Schema):
    """User response schema - matches frontend interface."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    roles: list[str]
    sub_organization_id: UUID | None = None
    sub_organization: str | None = None
    is_staff: bool
    is_superuser: bool

    @staticmethod
    def from_user(user: "User") -> "UserSchema":
        """Create schema from User model."""
        sub_organization = user.sub_organization
        return UserSchema(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            roles=list(user.groups.values_list("name", flat=True)),
            sub_organization_id=sub_organization.id if sub_organization else None,
            sub_organization=sub_organization.title if sub_organization else None,
            is_staff=user.is_staff,
            is_superuser=user.is_superuser,
        )


class UserUpdateSchema(Schema):
    """Profile update schema, every field optional."""

    first_name: str | None = None
    last_name: str | None = None

    @field_validator("first_name")
    @classmethod
    def first_name_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            msg = "First name cannot be empty."
            raise ValueError(msg)
        return v.strip() if v is not None else v


class LoginResponseSchema(Schema):
    """Login response schema."""

    success: bool
    user: UserSchema | None = None
    csrf_token: str | None = None


class CSRFTokenSchema(Schema):
    """CSRF token response."""

    csrf_token: str


class PasswordChangeSchema(Schema):
    """Password change schema for authenticated users."""

    current_password: str
    new_password: str
    new_password_confirm: str

    @field_validator("new_password_confirm")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        if "new_password" in info.data and v != info.data["new_password"]:
            msg = "Passwords do not match."
            raise ValueError(msg)
        return v
