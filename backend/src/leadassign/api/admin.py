"""Admin endpoints for reviewing submissions and editing assignments.

All routes require the ``admin`` role.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..assignment.directory import StaffDirectory, get_staff_directory
from ..assignment.models import StaffMember
from ..submissions.manager import (
    StaffNotFound,
    SubmissionManager,
    SubmissionNotFound,
    get_submission_manager,
)
from ..submissions.models import (
    ManualAssignmentRequest,
    Submission,
    SubmissionResponse,
)
from . import BadRequestError, NotFoundError
from .auth import CurrentUser, require_admin
from .pagination import PaginatedResult, PaginationParams

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin())],
)


# =============================================================================
# Submissions
# =============================================================================


@router.get("/submissions", response_model=PaginatedResult[Submission])
async def list_submissions(
    search: str | None = Query(default=None, max_length=200),
    pagination: PaginationParams = Depends(),
    manager: SubmissionManager = Depends(get_submission_manager),
) -> PaginatedResult[Submission]:
    """List lead submissions, newest first."""
    items, total = await manager.list_submissions(
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResult.create(items, total, pagination.limit, pagination.offset)


@router.get("/submissions/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: UUID,
    manager: SubmissionManager = Depends(get_submission_manager),
) -> SubmissionResponse:
    """Get a single submission with its assignment data."""
    submission = await manager.get_submission(submission_id)
    if submission is None:
        raise NotFoundError("Submission", submission_id)
    return SubmissionResponse(data=submission)


# =============================================================================
# Assignments
# =============================================================================


@router.post("/assignments", response_model=SubmissionResponse)
async def update_assignment(
    request: ManualAssignmentRequest,
    user: CurrentUser,
    manager: SubmissionManager = Depends(get_submission_manager),
) -> SubmissionResponse:
    """Manually assign a staff member to, or remove one from, a submission."""
    if not request.is_complete:
        raise BadRequestError("Missing required fields")

    try:
        submission = await manager.apply_manual_assignment(
            request.submission_id,
            request.staff_email,
            request.action,
            user_id=user.id,
        )
    except SubmissionNotFound as e:
        raise NotFoundError("Submission", e.submission_id)
    except StaffNotFound as e:
        raise NotFoundError("Staff member", e.email)

    return SubmissionResponse(data=submission)


@router.get("/staff", response_model=list[StaffMember])
async def list_staff(
    exclude_submission: UUID | None = Query(
        default=None,
        description="Omit staff already assigned to this submission",
    ),
    directory: StaffDirectory = Depends(get_staff_directory),
    manager: SubmissionManager = Depends(get_submission_manager),
) -> list[StaffMember]:
    """List the staff directory, optionally only members still assignable."""
    if exclude_submission is None:
        return list(directory)

    submission = await manager.get_submission(exclude_submission)
    if submission is None:
        raise NotFoundError("Submission", exclude_submission)

    assigned = [
        str(entry.get("email", ""))
        for entry in submission.assigned_staff
        if isinstance(entry, dict)
    ]
    return directory.excluding(assigned)
