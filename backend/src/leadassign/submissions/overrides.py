"""Manual assignment overrides.

Admins can add or remove a staff member on a stored submission. Stored
assignment entries are opaque JSON; only their ``email`` key is relied on.
Everything else in the stored assignment data (keywords, analysis log,
category, score) is carried through untouched.
"""

from copy import deepcopy
from typing import Any

from ..assignment.models import StaffMember
from .models import AssignmentAction


def empty_assignment_data() -> dict[str, Any]:
    """Starting point for submissions stored without assignment data."""
    return {"assignedStaff": [], "detectedKeywords": []}


def _entry_email(entry: Any) -> str:
    if isinstance(entry, dict):
        return str(entry.get("email", "")).lower()
    return ""


def apply_override(
    assignment_data: dict[str, Any] | None,
    staff: StaffMember,
    action: AssignmentAction | str,
) -> tuple[dict[str, Any], bool]:
    """Apply an assign/remove action to stored assignment data.

    Args:
        assignment_data: Current stored data, or None
        staff: Directory entry being assigned or removed
        action: "assign" or "remove"

    Returns:
        Tuple of (new assignment data, whether the staff list changed).
        The input is never mutated.

    Raises:
        ValueError: If the action is unknown
    """
    action = AssignmentAction(action)
    data = deepcopy(assignment_data) if assignment_data else empty_assignment_data()
    assigned = list(data.get("assignedStaff") or [])
    email = staff.email.lower()

    if action == AssignmentAction.ASSIGN:
        if any(_entry_email(entry) == email for entry in assigned):
            changed = False
        else:
            assigned.append(staff.to_ref().model_dump(by_alias=True))
            changed = True
    else:
        remaining = [entry for entry in assigned if _entry_email(entry) != email]
        changed = len(remaining) != len(assigned)
        assigned = remaining

    data["assignedStaff"] = assigned
    return data, changed
