"""
Substitute management projections.
"""

from school_records.schemas.substitute.student_summary import StudentSummaryDTO
from school_records.schemas.substitute.substitute_assignment import (
    SubstituteAssignmentDTO,
    filter_assignments,
)

__all__ = [
    "SubstituteAssignmentDTO",
    "StudentSummaryDTO",
    "filter_assignments",
]
