"""Rule-based project assignment.

Maps a lead's selected services and free-text project description to the
staff members who should handle it. Two independent passes run over the
staff directory:

1. Service pass: an interest matches a member when either string contains
   the other (tolerates naming drift between the service catalog and the
   directory).
2. Keyword pass: a skill is detected when it occurs anywhere in the
   lowercased description. Plain substring containment, so short skills
   such as "ai" also fire inside words like "said".

The resolver is a pure function of its input and the injected directory.
It never picks a fallback assignee; routing unmatched leads is up to the
caller.
"""

from collections.abc import Sequence

from ..logging import get_context_logger
from .directory import StaffDirectory, get_staff_directory
from .models import (
    DEFAULT_PRIMARY_CATEGORY,
    HIGH_CONFIDENCE,
    LOW_CONFIDENCE,
    AssignmentInput,
    ProjectAssignmentResult,
    StaffMember,
)

logger = get_context_logger(__name__, component="assignment_resolver")


def service_matches(interest: str, primary_service: str) -> bool:
    """Bidirectional substring containment, case-sensitive."""
    return interest in primary_service or primary_service in interest


class AssignmentResolver:
    """Resolves which staff members a lead should be routed to."""

    def __init__(self, directory: StaffDirectory):
        self.directory = directory

    def resolve(self, request: AssignmentInput) -> ProjectAssignmentResult:
        """Analyze a lead and pick the staff members to assign.

        Args:
            request: Selected service interests and project description

        Returns:
            Assignment result with staff, keywords, category, confidence
            and a human-readable trace of each decision
        """
        return self.analyze(request.service_interests, request.project_description)

    def analyze(
        self,
        service_interests: Sequence[str],
        project_description: str,
    ) -> ProjectAssignmentResult:
        """Same as :meth:`resolve`, taking the two inputs directly."""
        description_lower = project_description.lower()
        # Keyed by staff id; dicts keep insertion order
        assigned: dict[str, StaffMember] = {}
        detected: dict[str, None] = {}
        analysis_log = [
            f"Starting analysis for {len(service_interests)} services "
            f"and description length {len(project_description)}"
        ]

        for service in service_interests:
            matching = [
                staff
                for staff in self.directory
                if any(service_matches(service, s) for s in staff.primary_services)
            ]
            if not matching:
                analysis_log.append(f"No direct staff match for service: {service}")
                continue
            for staff in matching:
                assigned.setdefault(staff.id, staff)
                analysis_log.append(
                    f"Matched Service '{service}' to {staff.role} ({staff.name})"
                )

        for staff in self.directory:
            for skill in staff.skills:
                if skill.lower() not in description_lower:
                    continue
                detected.setdefault(skill, None)
                if staff.id not in assigned:
                    assigned[staff.id] = staff
                    analysis_log.append(
                        f"Matched Keyword '{skill}' to {staff.role} ({staff.name})"
                    )

        if not assigned:
            analysis_log.append(
                "No specific staff matched. Defaulting to general assignment."
            )

        result = ProjectAssignmentResult(
            assigned_staff=list(assigned.values()),
            # First interest as given, even "", default only when there are none
            primary_category=service_interests[0] if service_interests else DEFAULT_PRIMARY_CATEGORY,
            detected_keywords=list(detected),
            confidence_score=HIGH_CONFIDENCE if assigned else LOW_CONFIDENCE,
            analysis_log=analysis_log,
        )

        logger.debug(
            "Assignment analyzed",
            extra={
                "services": len(service_interests),
                "assigned": [s.id for s in result.assigned_staff],
                "keywords": result.detected_keywords,
            },
        )
        return result


def analyze_and_assign(
    service_interests: Sequence[str],
    project_description: str,
    directory: StaffDirectory | None = None,
) -> ProjectAssignmentResult:
    """Run the resolver against ``directory`` (default: the configured one)."""
    if directory is None:
        directory = get_staff_directory()
    resolver = AssignmentResolver(directory)
    return resolver.analyze(service_interests, project_description)
