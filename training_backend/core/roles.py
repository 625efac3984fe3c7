"""
Role definitions for the training planner.

Defines the 4 roles used across the platform:
- Admin: Organization administrators with full access
- Project Manager: Plan projects, schedule events, assign instructors
- Instructor: Deliver events, read the schedules they take part in
- Participant: Attend events, read their own schedule
"""

from enum import Enum


class Role(str, Enum):
    """
    Enum of available roles.

    Values match Django Group names exactly.
    """

    ADMIN = "Admin"
    PROJECT_MANAGER = "Project Manager"
    INSTRUCTOR = "Instructor"
    PARTICIPANT = "Participant"

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """Return choices for Django form fields."""
        return [(role.value, role.value) for role in cls]

    @classmethod
    def values(cls) -> list[str]:
        """Return all role values."""
        return [role.value for role in cls]


# Role descriptions for documentation and admin interfaces
ROLE_DESCRIPTIONS = {
    Role.ADMIN: "Admin - Full access to the organization",
    Role.PROJECT_MANAGER: "Project Manager - Plans projects, schedules events, assigns instructors",
    Role.INSTRUCTOR: "Instructor - Delivers events",
    Role.PARTICIPANT: "Participant - Attends events",
}


def get_user_roles(user) -> list[str]:
    """
    Get the list of role names for a user.

    Args:
        user: Django User instance

    Returns:
        List of role names the user belongs to
    """
    if not user or not user.is_authenticated:
        return []

    return list(user.groups.values_list("name", flat=True))


def user_has_role(user, role: Role | str) -> bool:
    """
    Check if a user has a specific role.

    Args:
        user: Django User instance
        role: Role enum value or role name string

    Returns:
        True if user has the role
    """
    if not user or not user.is_authenticated:
        return False

    role_name = role.value if isinstance(role, Role) else role
    return user.groups.filter(name=role_name).exists()


def user_has_any_role(user, roles: list[Role | str]) -> bool:
    """
    Check if a user has any of the specified roles.

    Args:
        user: Django User instance
        roles: List of Role enum values or role name strings

    Returns:
        True if user has at least one of the roles
    """
    if not user or not user.is_authenticated:
        return False

    role_names = [r.value if isinstance(r, Role) else r for r in roles]
    return user.groups.filter(name__in=role_names).exists()


# ============================================================================
# Convenience functions for common permission checks
# ============================================================================


def is_admin(user) -> bool:
    """
    Check if user has admin privileges.

    Returns True for superusers or users with Admin role.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user_has_role(user, Role.ADMIN)


def is_project_admin(user) -> bool:
    """
    Check if user can create and edit projects, events and rosters.

    Returns True for superusers or users with Admin or Project Manager roles.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user_has_any_role(user, [Role.ADMIN, Role.PROJECT_MANAGER])
