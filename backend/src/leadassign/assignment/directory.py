"""Staff directory used for project assignment.

The directory is a fixed, hand-maintained table. It ships with the
agency's default roster and can be replaced by a YAML or JSON file named
in the ``STAFF_DIRECTORY_PATH`` setting. Either way it is loaded once per
process and never mutated afterwards.
"""

import json
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..config import get_settings
from ..logging import get_context_logger
from .models import StaffMember, StaffRole

logger = get_context_logger(__name__, component="staff_directory")


class StaffDirectoryError(ValueError):
    """Raised when a staff directory definition is malformed."""


class StaffDirectory:
    """Immutable, ordered collection of staff members.

    Iteration follows definition order, which is also the order the
    resolver scans members in. Ids and emails are unique; email lookups
    are case-insensitive.
    """

    def __init__(self, members: Iterable[StaffMember]):
        self._members: tuple[StaffMember, ...] = tuple(members)
        self._by_id: dict[str, StaffMember] = {}
        self._by_email: dict[str, StaffMember] = {}

        for member in self._members:
            if member.id in self._by_id:
                raise StaffDirectoryError(f"Duplicate staff id: {member.id}")
            email_key = member.email.lower()
            if email_key in self._by_email:
                raise StaffDirectoryError(f"Duplicate staff email: {member.email}")
            self._by_id[member.id] = member
            self._by_email[email_key] = member

    def __iter__(self) -> Iterator[StaffMember]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member: object) -> bool:
        return isinstance(member, StaffMember) and member.id in self._by_id

    def __repr__(self) -> str:
        return f"StaffDirectory({len(self._members)} members)"

    @property
    def members(self) -> tuple[StaffMember, ...]:
        return self._members

    def get_by_id(self, staff_id: str) -> StaffMember | None:
        return self._by_id.get(staff_id)

    def get_by_email(self, email: str) -> StaffMember | None:
        """Find a member by email, ignoring case and surrounding whitespace."""
        if not email:
            return None
        return self._by_email.get(email.strip().lower())

    def excluding(self, emails: Iterable[str]) -> list[StaffMember]:
        """Members whose email is not in ``emails``.

        Used to offer only unassigned staff when editing an assignment.
        """
        taken = {e.strip().lower() for e in emails if e}
        return [m for m in self._members if m.email.lower() not in taken]

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "StaffDirectory":
        """Build a directory from plain dicts (snake_case or camelCase keys)."""
        members = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise StaffDirectoryError(
                    f"Staff entry {index} must be a mapping, got {type(record).__name__}"
                )
            try:
                members.append(StaffMember.model_validate(record))
            except ValidationError as e:
                raise StaffDirectoryError(f"Invalid staff entry {index}: {e}") from e
        return cls(members)


DEFAULT_STAFF = (
    StaffMember(
        id="staff_001",
        name="Alex Rivera",
        role=StaffRole.FRONTEND_LEAD,
        email="frontend@forgerdigital.com",
        skills=("react", "next.js", "typescript", "tailwind", "ui/ux", "figma", "frontend", "web"),
        primary_services=("Web Application Development", "Custom Software Development"),
    ),
    StaffMember(
        id="staff_002",
        name="Sarah Chen",
        role=StaffRole.BACKEND_LEAD,
        email="backend@forgerdigital.com",
        skills=(
            "node.js", "python", "database", "sql", "postgresql",
            "api", "graphql", "backend", "server",
        ),
        primary_services=(
            "Custom Software Development", "Enterprise Solutions", "Data & Analytics",
        ),
    ),
    StaffMember(
        id="staff_003",
        name="Marcus Johnson",
        role=StaffRole.MOBILE_LEAD,
        email="mobile@forgerdigital.com",
        skills=("react native", "ios", "android", "flutter", "mobile", "app store"),
        primary_services=("Mobile App Development",),
    ),
    StaffMember(
        id="staff_004",
        name="David Kim",
        role=StaffRole.CLOUD_ARCHITECT,
        email="cloud@forgerdigital.com",
        skills=(
            "aws", "azure", "gcp", "cloud", "docker",
            "kubernetes", "serverless", "infrastructure",
        ),
        primary_services=("Cloud Infrastructure & DevOps", "DevOps Automation"),
    ),
    StaffMember(
        id="staff_005",
        name="Elena Rodriguez",
        role=StaffRole.AI_ML_ENGINEER,
        email="ai@forgerdigital.com",
        skills=("ai", "machine learning", "nlp", "python", "tensorflow", "openai", "llm", "bot"),
        primary_services=("AI Integration", "Data & Analytics"),
    ),
    StaffMember(
        id="staff_006",
        name="James Wilson",
        role=StaffRole.SECURITY_SPECIALIST,
        email="security@forgerdigital.com",
        skills=(
            "security", "compliance", "penetration testing",
            "encryption", "audit", "cybersecurity",
        ),
        primary_services=("Cybersecurity & Compliance",),
    ),
    StaffMember(
        id="staff_007",
        name="Michael Chang",
        role=StaffRole.BLOCKCHAIN_DEVELOPER,
        email="blockchain@forgerdigital.com",
        skills=("blockchain", "web3", "smart contract", "solidity", "ethereum", "crypto"),
        primary_services=("Blockchain Development",),
    ),
)

DEFAULT_STAFF_DIRECTORY = StaffDirectory(DEFAULT_STAFF)


def load_staff_directory(path: str | Path) -> StaffDirectory:
    """Load a staff directory from a YAML or JSON file.

    The file holds either a list of staff entries or a mapping with a
    ``staff`` key containing that list.

    Args:
        path: Path to a .yaml, .yml or .json file

    Returns:
        The loaded directory

    Raises:
        StaffDirectoryError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise StaffDirectoryError(f"Staff directory file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise StaffDirectoryError(f"Could not parse {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("staff")
    if not isinstance(data, list):
        raise StaffDirectoryError(
            f"{path} must contain a list of staff entries or a 'staff' list"
        )

    directory = StaffDirectory.from_records(data)
    logger.info(f"Loaded {len(directory)} staff members from {path}")
    return directory


@lru_cache
def get_staff_directory() -> StaffDirectory:
    """Get the process-wide staff directory.

    Uses the file named by ``STAFF_DIRECTORY_PATH`` when set, otherwise
    the built-in roster.
    """
    settings = get_settings()
    if settings.staff_directory_path:
        return load_staff_directory(settings.staff_directory_path)
    return DEFAULT_STAFF_DIRECTORY
