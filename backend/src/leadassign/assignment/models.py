"""Pydantic models for project assignment.

Defines the staff directory entries, the resolver input and the
assignment result stored alongside each lead submission.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PRIMARY_CATEGORY = "General Inquiry"

HIGH_CONFIDENCE = 0.9
LOW_CONFIDENCE = 0.1


class StaffRole(str, Enum):
    """Job titles used in the staff directory."""

    PRINCIPAL_ARCHITECT = "Principal Architect"
    FRONTEND_LEAD = "Frontend Lead"
    BACKEND_LEAD = "Backend Lead"
    MOBILE_LEAD = "Mobile Lead"
    CLOUD_ARCHITECT = "Cloud Architect"
    SECURITY_SPECIALIST = "Security Specialist"
    AI_ML_ENGINEER = "AI/ML Engineer"
    BLOCKCHAIN_DEVELOPER = "Blockchain Developer"
    DEVOPS_ENGINEER = "DevOps Engineer"
    DATA_SCIENTIST = "Data Scientist"
    PROJECT_MANAGER = "Project Manager"


class _CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class StaffMember(_CamelModel):
    """A staff member who can be assigned to incoming leads."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable staff identifier")
    name: str
    role: StaffRole
    email: str = Field(..., description="Notification address, unique in the directory")
    skills: tuple[str, ...] = Field(
        default=(), description="Lowercase keywords the member is expert in"
    )
    primary_services: tuple[str, ...] = Field(
        default=(), description="Service categories the member normally handles"
    )

    def to_ref(self) -> "AssignedStaffRef":
        """Trimmed form stored when an admin assigns this member by hand."""
        return AssignedStaffRef(
            id=self.id, name=self.name, role=self.role, email=self.email
        )


class AssignedStaffRef(_CamelModel):
    """Identifying fields of an assigned staff member."""

    id: str
    name: str
    role: str
    email: str


class AssignmentInput(_CamelModel):
    """What the resolver looks at for a single lead."""

    service_interests: list[str] = Field(default_factory=list)
    project_description: str = ""


class ProjectAssignmentResult(_CamelModel):
    """Outcome of analyzing a lead against the staff directory."""

    assigned_staff: list[StaffMember] = Field(default_factory=list)
    primary_category: str = DEFAULT_PRIMARY_CATEGORY
    detected_keywords: list[str] = Field(default_factory=list)
    confidence_score: float = Field(default=LOW_CONFIDENCE, ge=0.0, le=1.0)
    analysis_log: list[str] = Field(default_factory=list)

    @property
    def assigned_emails(self) -> list[str]:
        """Emails of the assigned staff, in assignment order."""
        return [staff.email for staff in self.assigned_staff]

    def to_storage(self) -> dict:
        """JSON-ready form persisted on the submission record."""
        return self.model_dump(mode="json", by_alias=True)
