"""Unit tests for manual assignment overrides.

Run with: pytest tests/unit/submissions/test_overrides.py -v
"""

from copy import deepcopy

import pytest

from leadassign.assignment.directory import DEFAULT_STAFF_DIRECTORY
from leadassign.assignment.resolver import analyze_and_assign
from leadassign.submissions.models import AssignmentAction
from leadassign.submissions.overrides import apply_override, empty_assignment_data


@pytest.fixture
def mobile_lead():
    return DEFAULT_STAFF_DIRECTORY.get_by_email("mobile@forgerdigital.com")


@pytest.fixture
def ai_engineer():
    return DEFAULT_STAFF_DIRECTORY.get_by_email("ai@forgerdigital.com")


@pytest.fixture
def stored_result() -> dict:
    """Resolver output as persisted on a submission."""
    return analyze_and_assign(
        ["Mobile App Development"], "We need an iOS app", DEFAULT_STAFF_DIRECTORY
    ).to_storage()


def _emails(data: dict) -> list[str]:
    return [entry["email"] for entry in data["assignedStaff"]]


class TestAssign:
    """Tests for the assign action."""

    def test_assign_to_missing_data(self, ai_engineer):
        data, changed = apply_override(None, ai_engineer, "assign")

        assert changed
        assert data["detectedKeywords"] == []
        assert data["assignedStaff"] == [{
            "id": "staff_005",
            "name": "Elena Rodriguez",
            "role": "AI/ML Engineer",
            "email": "ai@forgerdigital.com",
        }]

    def test_assign_appends_trimmed_entry(self, stored_result, ai_engineer):
        data, changed = apply_override(stored_result, ai_engineer, AssignmentAction.ASSIGN)

        assert changed
        assert _emails(data) == ["mobile@forgerdigital.com", "ai@forgerdigital.com"]
        assert set(data["assignedStaff"][1]) == {"id", "name", "role", "email"}

    def test_assign_is_idempotent(self, stored_result, mobile_lead):
        data, changed = apply_override(stored_result, mobile_lead, "assign")

        assert not changed
        assert data["assignedStaff"] == stored_result["assignedStaff"]

    def test_assign_matches_stored_email_ignoring_case(self, mobile_lead):
        stored = {"assignedStaff": [{"id": "staff_003", "email": "MOBILE@forgerdigital.com"}]}

        _, changed = apply_override(stored, mobile_lead, "assign")

        assert not changed

    def test_other_fields_untouched(self, stored_result, ai_engineer):
        data, _ = apply_override(stored_result, ai_engineer, "assign")

        assert data["detectedKeywords"] == stored_result["detectedKeywords"]
        assert data["analysisLog"] == stored_result["analysisLog"]
        assert data["confidenceScore"] == stored_result["confidenceScore"]
        assert data["primaryCategory"] == "Mobile App Development"


class TestRemove:
    """Tests for the remove action."""

    def test_remove_assigned(self, stored_result, mobile_lead):
        data, changed = apply_override(stored_result, mobile_lead, "remove")

        assert changed
        assert data["assignedStaff"] == []

    def test_remove_unassigned(self, stored_result, ai_engineer):
        data, changed = apply_override(stored_result, ai_engineer, "remove")

        assert not changed
        assert _emails(data) == ["mobile@forgerdigital.com"]

    def test_remove_from_missing_data(self, mobile_lead):
        data, changed = apply_override(None, mobile_lead, "remove")

        assert not changed
        assert data == empty_assignment_data()

    def test_entries_without_email_are_kept(self, mobile_lead):
        stored = {"assignedStaff": [{"id": "legacy"}, "bogus"]}

        data, changed = apply_override(stored, mobile_lead, "remove")

        assert not changed
        assert data["assignedStaff"] == [{"id": "legacy"}, "bogus"]


class TestOverrideContract:
    """Tests for input handling."""

    def test_input_not_mutated(self, stored_result, ai_engineer, mobile_lead):
        original = deepcopy(stored_result)

        apply_override(stored_result, ai_engineer, "assign")
        apply_override(stored_result, mobile_lead, "remove")

        assert stored_result == original

    def test_unknown_action(self, stored_result, mobile_lead):
        with pytest.raises(ValueError):
            apply_override(stored_result, mobile_lead, "promote")
