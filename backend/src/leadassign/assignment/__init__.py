"""
Project Assignment
==================

Routes incoming leads to staff members by matching selected services and
project-description keywords against the staff directory.
"""

from .directory import (
    DEFAULT_STAFF_DIRECTORY,
    StaffDirectory,
    StaffDirectoryError,
    get_staff_directory,
    load_staff_directory,
)
from .models import (
    DEFAULT_PRIMARY_CATEGORY,
    AssignedStaffRef,
    AssignmentInput,
    ProjectAssignmentResult,
    StaffMember,
    StaffRole,
)
from .resolver import AssignmentResolver, analyze_and_assign

__all__ = [
    "DEFAULT_PRIMARY_CATEGORY",
    "DEFAULT_STAFF_DIRECTORY",
    "AssignedStaffRef",
    "AssignmentInput",
    "AssignmentResolver",
    "ProjectAssignmentResult",
    "StaffDirectory",
    "StaffDirectoryError",
    "StaffMember",
    "StaffRole",
    "analyze_and_assign",
    "get_staff_directory",
    "load_staff_directory",
]
