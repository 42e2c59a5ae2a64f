"""Staff endpoints: the "my assignments" dashboard feed."""

from fastapi import APIRouter, Depends, Query

from ..config import get_settings
from ..submissions.manager import SubmissionManager, get_submission_manager
from ..submissions.models import StaffAssignmentsResponse
from .auth import StaffUser

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("/assignments", response_model=StaffAssignmentsResponse)
async def my_assignments(
    user: StaffUser,
    limit: int | None = Query(default=None, ge=1, le=500),
    manager: SubmissionManager = Depends(get_submission_manager),
) -> StaffAssignmentsResponse:
    """Recent submissions assigned to the signed-in staff member."""
    if limit is None:
        limit = get_settings().staff_assignments_limit
    submissions = await manager.list_for_staff(user.email, limit=limit)
    return StaffAssignmentsResponse(submissions=submissions)
