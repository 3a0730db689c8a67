# --- File: school_records/schemas/substitute/student_summary.py ---
"""
Student summary projection used by roster and picker views.
"""

from typing import Optional

from pydantic import EmailStr, Field, computed_field

from school_records.schemas.common.base import BaseSchema

__all__ = ["StudentSummaryDTO"]


class StudentSummaryDTO(BaseSchema):
    """Identifiers and display strings for one student."""

    id: int = Field(...)
    student_id: Optional[str] = Field(default=None, description="School-issued student number")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    grade_level: Optional[str] = Field(default=None)
    email: Optional[EmailStr] = Field(default=None)
    active: bool = Field(default=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_label(self) -> str:
        label = f"{self.last_name}, {self.first_name}"
        if self.student_id:
            label += f" ({self.student_id})"
        if self.grade_level:
            label += f" - Grade {self.grade_level}"
        return label
