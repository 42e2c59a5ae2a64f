"""Pydantic models for lead submissions.

Request schemas validate and sanitize the "get started" form; the
Submission model mirrors a stored row, including the assignment data
produced by the resolver (or edited by an admin afterwards).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..api.sanitization import sanitize_email, sanitize_phone, sanitize_string


class ContactMethod(str, Enum):
    """How the lead prefers to be contacted."""

    EMAIL = "email"
    PHONE = "phone"
    VIDEO = "video"


class AssignmentAction(str, Enum):
    """Manual override actions available to admins."""

    ASSIGN = "assign"
    REMOVE = "remove"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


ServiceInterest = Annotated[str, Field(max_length=100)]


# =============================================================================
# Intake
# =============================================================================


class GetStartedRequest(_CamelModel):
    """Body of the public "get started" form."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=255)
    phone: str | None = None
    role: str | None = Field(default=None, max_length=100)
    project_description: str = Field(..., min_length=10, max_length=5000)
    service_interests: list[ServiceInterest] = Field(..., min_length=1, max_length=10)
    contact_method: ContactMethod
    timeline: str | None = Field(default=None, max_length=100)
    budget: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("first_name", "last_name", "company")
    @classmethod
    def _required_text(cls, value: str) -> str:
        value = sanitize_string(value)
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("role", "timeline", "budget", "project_description")
    @classmethod
    def _free_text(cls, value: str | None) -> str | None:
        return sanitize_string(value) if value else value

    @field_validator("service_interests")
    @classmethod
    def _services(cls, value: list[str]) -> list[str]:
        return [sanitize_string(service) for service in value]

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        email = sanitize_email(value)
        if email is None:
            raise ValueError("Invalid email address")
        return email

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str | None) -> str | None:
        if not value:
            return None
        phone = sanitize_phone(value)
        if phone is None:
            raise ValueError("Invalid phone number format")
        return phone


class IntakeResponse(_CamelModel):
    """Returned to the lead after a successful submission."""

    success: bool = True
    submission_id: UUID
    primary_category: str
    assigned_staff: list[dict[str, Any]] = Field(default_factory=list)
    detected_keywords: list[str] = Field(default_factory=list)
    confidence_score: float
    message: str = "Your inquiry has been received. We'll contact you soon!"


# =============================================================================
# Stored submission
# =============================================================================


class Submission(_CamelModel):
    """A stored "get started" submission."""

    id: UUID = Field(default_factory=uuid4)
    first_name: str
    last_name: str
    company: str
    email: str
    phone: str | None = None
    role: str | None = None
    project_description: str
    service_interests: list[str] = Field(default_factory=list)
    contact_method: str
    timeline: str | None = None
    budget: str | None = None
    assignment_data: dict[str, Any] | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def assigned_staff(self) -> list[dict[str, Any]]:
        """Stored assignment entries (opaque dicts)."""
        if not self.assignment_data:
            return []
        return list(self.assignment_data.get("assignedStaff") or [])

    def is_assigned_to(self, email: str) -> bool:
        """Whether the staff member with ``email`` is on this submission."""
        email = email.strip().lower()
        return any(
            str(entry.get("email", "")).lower() == email
            for entry in self.assigned_staff
            if isinstance(entry, dict)
        )


class SubmissionResponse(_CamelModel):
    """Standard envelope for a single submission."""

    success: bool = True
    data: Submission


class StaffAssignmentsResponse(_CamelModel):
    """Submissions assigned to the calling staff member."""

    success: bool = True
    submissions: list[Submission]


# =============================================================================
# Manual override
# =============================================================================


class ManualAssignmentRequest(_CamelModel):
    """Admin request to add or remove a staff member on a submission.

    Fields are optional at the schema level so a missing field yields the
    400 "Missing required fields" answer instead of a schema error.
    """

    submission_id: UUID | None = None
    staff_email: str | None = None
    action: AssignmentAction | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.submission_id and self.staff_email and self.action)
