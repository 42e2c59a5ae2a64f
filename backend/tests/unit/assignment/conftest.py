"""Pytest fixtures for assignment unit tests."""

import pytest

from leadassign.assignment.directory import DEFAULT_STAFF_DIRECTORY, StaffDirectory
from leadassign.assignment.models import StaffMember, StaffRole
from leadassign.assignment.resolver import AssignmentResolver


@pytest.fixture
def default_directory() -> StaffDirectory:
    """The built-in seven-member roster."""
    return DEFAULT_STAFF_DIRECTORY


@pytest.fixture
def resolver(default_directory) -> AssignmentResolver:
    """Resolver bound to the built-in roster."""
    return AssignmentResolver(default_directory)


@pytest.fixture
def small_directory() -> StaffDirectory:
    """Two-member directory for tests that need a custom roster."""
    return StaffDirectory([
        StaffMember(
            id="pm_1",
            name="Priya Nair",
            role=StaffRole.PROJECT_MANAGER,
            email="pm@example.com",
            skills=("roadmap", "scrum"),
            primary_services=("Product Strategy",),
        ),
        StaffMember(
            id="ds_1",
            name="Tom Berg",
            role=StaffRole.DATA_SCIENTIST,
            email="Data@Example.com",
            skills=("pandas", "forecast"),
            primary_services=("Data & Analytics",),
        ),
    ])


@pytest.fixture
def staff_records() -> list[dict]:
    """Directory entries as they appear in a YAML/JSON file (camelCase)."""
    return [
        {
            "id": "pm_1",
            "name": "Priya Nair",
            "role": "Project Manager",
            "email": "pm@example.com",
            "skills": ["roadmap", "scrum"],
            "primaryServices": ["Product Strategy"],
        },
        {
            "id": "ds_1",
            "name": "Tom Berg",
            "role": "Data Scientist",
            "email": "data@example.com",
            "skills": ["pandas"],
            "primary_services": ["Data & Analytics"],
        },
    ]
