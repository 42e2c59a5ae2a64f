"""Pytest fixtures for API integration tests.

The real FastAPI app is exercised end to end; only the SQL layer is
replaced by an in-memory store.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from leadassign.api.auth import User, create_access_token
from leadassign.api.middleware import get_rate_limiter
from leadassign.assignment.directory import DEFAULT_STAFF_DIRECTORY
from leadassign.assignment.resolver import analyze_and_assign
from leadassign.main import app
from leadassign.submissions.manager import SubmissionManager, get_submission_manager
from leadassign.submissions.models import Submission


class InMemorySubmissionManager(SubmissionManager):
    """SubmissionManager keeping submissions in a dict instead of Postgres."""

    def __init__(self, store: dict[UUID, Submission]):
        super().__init__(AsyncMock(), DEFAULT_STAFF_DIRECTORY)
        self.store = store

    async def create_submission(self, request):
        submission, result = await super().create_submission(request)
        self.store[submission.id] = submission
        return submission, result

    async def get_submission(self, submission_id):
        return self.store.get(submission_id)

    def _newest_first(self) -> list[Submission]:
        return sorted(self.store.values(), key=lambda s: s.created_at, reverse=True)

    async def list_submissions(self, search=None, limit=20, offset=0):
        items = self._newest_first()
        if search:
            term = search.strip().lower()
            items = [
                s for s in items
                if any(term in value.lower() for value in (s.first_name, s.last_name, s.email, s.company))
            ]
        return items[offset:offset + limit], len(items)

    async def list_for_staff(self, email, limit=50):
        return [s for s in self._newest_first() if s.is_assigned_to(email)][:limit]


# =========================
# App Fixtures
# =========================


@pytest.fixture
def submission_store() -> dict[UUID, Submission]:
    return {}


@pytest.fixture
def manager(submission_store) -> InMemorySubmissionManager:
    return InMemorySubmissionManager(submission_store)


@pytest.fixture
def client(manager):
    """Test client with the in-memory manager and a fresh rate limiter."""
    app.dependency_overrides[get_submission_manager] = lambda: manager
    get_rate_limiter().reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_rate_limiter().reset()


# =========================
# Auth Fixtures
# =========================


def _auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _auth_headers(
        User(id="admin-1", email="admin@forgerdigital.com", name="Admin", roles=["admin"])
    )


@pytest.fixture
def mobile_staff_headers() -> dict[str, str]:
    return _auth_headers(
        User(
            id="staff-003",
            email="Mobile@ForgerDigital.com",
            name="Marcus Johnson",
            roles=["staff"],
        )
    )


@pytest.fixture
def ai_staff_headers() -> dict[str, str]:
    return _auth_headers(
        User(id="staff-005", email="ai@forgerdigital.com", name="Elena Rodriguez", roles=["staff"])
    )


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return _auth_headers(User(id="viewer-1", email="viewer@example.com", name="Viewer", roles=[]))


# =========================
# Sample Data Fixtures
# =========================


@pytest.fixture
def form_data() -> dict:
    """A valid "get started" form body."""
    return {
        "firstName": "Dana",
        "lastName": "Okafor",
        "company": "Acme Logistics",
        "email": "dana@acme.io",
        "phone": "+1 555 010 2030",
        "projectDescription": "We need an iOS app for our drivers",
        "serviceInterests": ["Mobile App Development"],
        "contactMethod": "phone",
        "timeline": "3 months",
    }


@pytest.fixture
def make_submission(submission_store):
    """Factory storing a submission analyzed by the real resolver."""
    counter = {"n": 0}

    def _make(
        company: str,
        services: list[str],
        description: str,
        assignment_data: dict | None = None,
    ) -> Submission:
        counter["n"] += 1
        if assignment_data is None:
            assignment_data = analyze_and_assign(
                services, description, DEFAULT_STAFF_DIRECTORY
            ).to_storage()
        submission = Submission(
            first_name="Lead",
            last_name=f"Number{counter['n']}",
            company=company,
            email=f"lead{counter['n']}@example.com",
            project_description=description,
            service_interests=services,
            contact_method="email",
            assignment_data=assignment_data,
            created_at=datetime(2026, 1, 1) + timedelta(days=counter["n"]),
        )
        submission_store[submission.id] = submission
        return submission

    return _make
