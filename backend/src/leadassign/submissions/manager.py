"""Submission storage and assignment bookkeeping.

The SubmissionManager persists "get started" submissions together with
the resolver's assignment result, and applies admin overrides to that
stored result.
"""

import json
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..api.sanitization import sanitize_for_sql_like, sanitize_html
from ..assignment.directory import StaffDirectory, get_staff_directory
from ..assignment.models import ProjectAssignmentResult
from ..assignment.resolver import AssignmentResolver
from ..db import get_db
from ..logging import get_context_logger, log_assignment_result, log_manual_override
from .models import AssignmentAction, GetStartedRequest, Submission
from .overrides import apply_override

logger = get_context_logger(__name__, component="submissions")

_COLUMNS = (
    "id, first_name, last_name, company, email, phone, role, "
    "project_description, service_interests, contact_method, timeline, "
    "budget, assignment_data, created_at, updated_at"
)


class SubmissionNotFound(LookupError):
    """No submission exists with the requested id."""

    def __init__(self, submission_id: UUID):
        self.submission_id = submission_id
        super().__init__(f"Submission not found: {submission_id}")


class StaffNotFound(LookupError):
    """The staff email is not in the directory."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Staff member not found in directory: {email}")


def _load_json(value: Any) -> Any:
    """JSONB columns come back as text from asyncpg unless a codec is set."""
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


class SubmissionManager:
    """Stores submissions and manages their staff assignment.

    The manager is responsible for:
    - Running the resolver on new submissions and storing the result
    - Listing submissions for admins and for individual staff members
    - Applying manual assign/remove overrides
    """

    def __init__(
        self,
        session: AsyncSession,
        directory: StaffDirectory | None = None,
    ):
        """Initialize the manager.

        Args:
            session: Database session used for all queries
            directory: Staff directory; defaults to the configured one
        """
        self._session = session
        self.directory = directory if directory is not None else get_staff_directory()
        self.resolver = AssignmentResolver(self.directory)

    # =========================================================================
    # Intake
    # =========================================================================

    async def create_submission(
        self, request: GetStartedRequest
    ) -> tuple[Submission, ProjectAssignmentResult]:
        """Analyze and store a new lead submission.

        Args:
            request: Validated and sanitized form data

        Returns:
            Tuple of (stored submission, assignment result)
        """
        result = self.resolver.analyze(
            request.service_interests, request.project_description
        )

        now = datetime.utcnow()
        submission = Submission(
            id=uuid4(),
            first_name=request.first_name,
            last_name=request.last_name,
            company=request.company,
            email=request.email,
            phone=request.phone,
            role=request.role,
            project_description=sanitize_html(request.project_description),
            service_interests=list(request.service_interests),
            contact_method=request.contact_method,
            timeline=request.timeline,
            budget=request.budget,
            assignment_data=result.to_storage(),
            created_at=now,
            updated_at=now,
        )

        await self._session.execute(
            text(f"""
            INSERT INTO get_started_submissions ({_COLUMNS})
            VALUES (
                :id, :first_name, :last_name, :company, :email, :phone, :role,
                :project_description, CAST(:service_interests AS jsonb),
                :contact_method, :timeline, :budget,
                CAST(:assignment_data AS jsonb), :created_at, :updated_at
            )
            """),
            {
                "id": str(submission.id),
                "first_name": submission.first_name,
                "last_name": submission.last_name,
                "company": submission.company,
                "email": submission.email,
                "phone": submission.phone,
                "role": submission.role,
                "project_description": submission.project_description,
                "service_interests": json.dumps(submission.service_interests),
                "contact_method": submission.contact_method,
                "timeline": submission.timeline,
                "budget": submission.budget,
                "assignment_data": json.dumps(submission.assignment_data),
                "created_at": submission.created_at,
                "updated_at": submission.updated_at,
            },
        )
        await self._session.commit()

        log_assignment_result(
            str(submission.id),
            result.assigned_emails,
            result.detected_keywords,
            result.confidence_score,
        )
        return submission, result

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_submission(self, submission_id: UUID) -> Submission | None:
        """Get a submission by ID, or None if it does not exist."""
        result = await self._session.execute(
            text(f"SELECT {_COLUMNS} FROM get_started_submissions WHERE id = :id"),
            {"id": str(submission_id)},
        )
        row = result.fetchone()
        if row is None:
            return None
        return self._row_to_submission(row)

    async def list_submissions(
        self,
        search: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Submission], int]:
        """List submissions, newest first.

        Args:
            search: Case-insensitive match on name, email or company
            limit: Maximum results to return
            offset: Offset for pagination

        Returns:
            Tuple of (submissions, total count)
        """
        where = ""
        params: dict[str, Any] = {}
        if search:
            where = (
                " WHERE first_name ILIKE :pattern OR last_name ILIKE :pattern"
                " OR email ILIKE :pattern OR company ILIKE :pattern"
            )
            params["pattern"] = f"%{sanitize_for_sql_like(search.strip())}%"

        count_result = await self._session.execute(
            text(f"SELECT COUNT(*) FROM get_started_submissions{where}"),
            params,
        )
        total = count_result.scalar() or 0

        result = await self._session.execute(
            text(
                f"SELECT {_COLUMNS} FROM get_started_submissions{where}"
                " ORDER BY created_at DESC LIMIT :limit OFFSET :offset"
            ),
            {**params, "limit": limit, "offset": offset},
        )
        return [self._row_to_submission(row) for row in result.fetchall()], total

    async def list_for_staff(self, email: str, limit: int = 50) -> list[Submission]:
        """Most recent submissions assigned to the staff member with ``email``."""
        result = await self._session.execute(
            text(f"""
            SELECT {_COLUMNS} FROM get_started_submissions
            WHERE EXISTS (
                SELECT 1 FROM jsonb_array_elements(
                    CASE WHEN jsonb_typeof(assignment_data -> 'assignedStaff') = 'array'
                         THEN assignment_data -> 'assignedStaff'
                         ELSE CAST('[]' AS jsonb)
                    END
                ) AS staff
                WHERE lower(staff ->> 'email') = :email
            )
            ORDER BY created_at DESC
            LIMIT :limit
            """),
            {"email": email.strip().lower(), "limit": limit},
        )
        return [self._row_to_submission(row) for row in result.fetchall()]

    # =========================================================================
    # Manual override
    # =========================================================================

    async def apply_manual_assignment(
        self,
        submission_id: UUID,
        staff_email: str,
        action: AssignmentAction | str,
        user_id: str | None = None,
    ) -> Submission:
        """Assign or remove a staff member on a stored submission.

        Args:
            submission_id: Submission to edit
            staff_email: Email of a directory member
            action: "assign" or "remove"
            user_id: Admin performing the change (for the audit log)

        Returns:
            The updated submission

        Raises:
            SubmissionNotFound: If the submission does not exist
            StaffNotFound: If the email is not in the directory
            ValueError: If the action is unknown
        """
        action = AssignmentAction(action)

        submission = await self.get_submission(submission_id)
        if submission is None:
            raise SubmissionNotFound(submission_id)

        staff = self.directory.get_by_email(staff_email)
        if staff is None:
            raise StaffNotFound(staff_email)

        assignment_data, changed = apply_override(
            submission.assignment_data, staff, action
        )
        submission.assignment_data = assignment_data
        submission.updated_at = datetime.utcnow()

        await self._session.execute(
            text("""
            UPDATE get_started_submissions
            SET assignment_data = CAST(:assignment_data AS jsonb),
                updated_at = :updated_at
            WHERE id = :id
            """),
            {
                "id": str(submission.id),
                "assignment_data": json.dumps(assignment_data),
                "updated_at": submission.updated_at,
            },
        )
        await self._session.commit()

        log_manual_override(
            str(submission.id), staff.email, action.value, changed, user_id=user_id
        )
        return submission

    def _row_to_submission(self, row: Any) -> Submission:
        """Convert a database row to a Submission object."""
        # asyncpg returns UUID objects, other drivers strings
        submission_id = row.id if isinstance(row.id, UUID) else UUID(str(row.id))

        return Submission(
            id=submission_id,
            first_name=row.first_name,
            last_name=row.last_name,
            company=row.company,
            email=row.email,
            phone=row.phone,
            role=row.role,
            project_description=row.project_description,
            service_interests=_load_json(row.service_interests) or [],
            contact_method=row.contact_method,
            timeline=row.timeline,
            budget=row.budget,
            assignment_data=_load_json(row.assignment_data),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


async def get_submission_manager(
    session: AsyncSession = Depends(get_db),
    directory: StaffDirectory = Depends(get_staff_directory),
) -> SubmissionManager:
    """FastAPI dependency providing a SubmissionManager."""
    return SubmissionManager(session, directory)
