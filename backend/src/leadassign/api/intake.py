"""API endpoint for the public "get started" lead form."""

from fastapi import APIRouter, Depends

from ..config import get_settings
from ..logging import get_context_logger
from ..submissions.manager import SubmissionManager, get_submission_manager
from ..submissions.models import GetStartedRequest, IntakeResponse

logger = get_context_logger(__name__, component="intake")

router = APIRouter(tags=["Intake"])


@router.post("/get-started", response_model=IntakeResponse, status_code=201)
async def submit_get_started(
    request: GetStartedRequest,
    manager: SubmissionManager = Depends(get_submission_manager),
) -> IntakeResponse:
    """Accept a lead, route it to matching staff and store it."""
    submission, result = await manager.create_submission(request)

    if not result.assigned_staff:
        logger.info(
            "No staff matched; lead goes to the general inbox",
            extra={
                "submission_id": str(submission.id),
                "inbox": get_settings().admin_email,
            },
        )

    return IntakeResponse(
        submission_id=submission.id,
        primary_category=result.primary_category,
        assigned_staff=[
            staff.to_ref().model_dump(by_alias=True) for staff in result.assigned_staff
        ],
        detected_keywords=result.detected_keywords,
        confidence_score=result.confidence_score,
    )
