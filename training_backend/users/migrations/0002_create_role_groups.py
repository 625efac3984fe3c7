"""
Data migration to create the 4 role groups of the training planner.

Groups:
- Admin: Organization administrators with full access
- Project Manager: Plan projects, schedule events, assign instructors
- Instructor: Deliver events
- Participant: Attend events
"""

from django.db import migrations

ROLES = [
    "Admin",
    "Project Manager",
    "Instructor",
    "Participant",
]


def create_role_groups(apps, schema_editor):
    """Create the role groups."""
    Group = apps.get_model("auth", "Group")

    for role_name in ROLES:
        Group.objects.get_or_create(name=role_name)


def remove_role_groups(apps, schema_editor):
    """Remove the role groups (reverse migration)."""
    Group = apps.get_model("auth", "Group")
    Group.objects.filter(name__in=ROLES).delete()


class Migration(migrations.Migration):
    """Create role groups for the training planner."""

    dependencies = [
        ("users", "0001_initial"),
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.RunPython(create_role_groups, remove_role_groups),
    ]
