"""Lead submissions: intake schemas, storage and manual assignment overrides."""

from .manager import (
    StaffNotFound,
    SubmissionManager,
    SubmissionNotFound,
    get_submission_manager,
)
from .models import (
    AssignmentAction,
    ContactMethod,
    GetStartedRequest,
    ManualAssignmentRequest,
    Submission,
)
from .overrides import apply_override

__all__ = [
    "AssignmentAction",
    "ContactMethod",
    "GetStartedRequest",
    "ManualAssignmentRequest",
    "StaffNotFound",
    "Submission",
    "SubmissionManager",
    "SubmissionNotFound",
    "apply_override",
    "get_submission_manager",
]
