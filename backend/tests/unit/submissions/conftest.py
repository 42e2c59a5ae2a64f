"""Pytest fixtures for submission unit tests."""

import json
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from leadassign.assignment.directory import DEFAULT_STAFF_DIRECTORY
from leadassign.assignment.resolver import analyze_and_assign


@pytest.fixture
def form_data() -> dict:
    """A valid "get started" form body, as the frontend sends it."""
    return {
        "firstName": "Dana",
        "lastName": "Okafor",
        "company": "Acme Logistics",
        "email": "Dana@Acme.io",
        "phone": "+1 (555) 010-2030",
        "role": "CTO",
        "projectDescription": "We need an iOS app for our drivers",
        "serviceInterests": ["Mobile App Development"],
        "contactMethod": "email",
        "timeline": "3 months",
        "budget": "$50k-$100k",
    }


@pytest.fixture
def mock_db_session():
    """Mock database session for testing without actual DB."""
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock())
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def submission_row():
    """A row as returned by the submissions SELECT, JSONB columns as text."""
    assignment = analyze_and_assign(
        ["Mobile App Development"], "We need an iOS app", DEFAULT_STAFF_DIRECTORY
    )
    now = datetime(2026, 1, 5, 12, 0, 0)
    return SimpleNamespace(
        id=uuid4(),
        first_name="Dana",
        last_name="Okafor",
        company="Acme Logistics",
        email="dana@acme.io",
        phone=None,
        role=None,
        project_description="We need an iOS app",
        service_interests=json.dumps(["Mobile App Development"]),
        contact_method="email",
        timeline=None,
        budget=None,
        assignment_data=json.dumps(assignment.to_storage()),
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def row_result():
    """Factory for execute results whose fetchone() returns a given row."""

    def _make(row) -> MagicMock:
        result = MagicMock()
        result.fetchone.return_value = row
        return result

    return _make
