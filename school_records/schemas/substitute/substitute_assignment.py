# --- File: school_records/schemas/substitute/substitute_assignment.py ---
"""
Substitute assignment projection.

Flat, pre-resolved copy of an assignment and the people it references,
so table views never have to walk back into lazily loaded relations.
"""

from datetime import date as Date, time
from typing import List, Optional

from pydantic import Field, computed_field

from school_records.schemas.common.base import BaseSchema
from school_records.schemas.common.enums import AssignmentDurationType, AssignmentStatus

__all__ = [
    "SubstituteAssignmentDTO",
    "filter_assignments",
]


class SubstituteAssignmentDTO(BaseSchema):
    """One substitute covering for one absent staff member."""

    id: int = Field(..., description="Assignment identifier")
    assignment_date: Date = Field(...)
    end_date: Optional[Date] = Field(default=None, description="Last day for multi-day cover")
    start_time: Optional[time] = Field(default=None)
    end_time: Optional[time] = Field(default=None)
    duration_type: AssignmentDurationType = Field(default=AssignmentDurationType.FULL_DAY)
    status: AssignmentStatus = Field(default=AssignmentStatus.PENDING)

    substitute_id: Optional[int] = Field(default=None)
    substitute_name: Optional[str] = Field(default=None)
    replaced_staff_id: Optional[int] = Field(default=None)
    replaced_staff_name: Optional[str] = Field(default=None)

    absence_reason: Optional[str] = Field(default=None)
    room_number: Optional[str] = Field(default=None)
    course_names: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def time_range(self) -> str:
        if self.start_time is None or self.end_time is None:
            return "Full Day" if self.duration_type == AssignmentDurationType.FULL_DAY else ""
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_status(self) -> str:
        return self.status.display_name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def courses_display(self) -> str:
        return ", ".join(self.course_names)

    def covers(self, day: Date) -> bool:
        last = self.end_date or self.assignment_date
        return self.assignment_date <= day <= last


def filter_assignments(
    assignments: List[SubstituteAssignmentDTO],
    status: Optional[AssignmentStatus] = None,
    substitute_id: Optional[int] = None,
    start: Optional[Date] = None,
    end: Optional[Date] = None,
) -> List[SubstituteAssignmentDTO]:
    """
    Narrow an assignment listing the way the substitute management view does.

    Every given criterion must match. The date range keeps assignments
    whose `assignment_date` falls inside it, inclusive.
    """
    result = []
    for assignment in assignments:
        if status is not None and assignment.status != status:
            continue
        if substitute_id is not None and assignment.substitute_id != substitute_id:
            continue
        if start is not None and assignment.assignment_date < start:
            continue
        if end is not None and assignment.assignment_date > end:
            continue
        result.append(assignment)
    return sorted(result, key=lambda a: (a.assignment_date, a.start_time or time.min))
