from __future__ import annotations

from datetime import date, time

import pytest

from school_records.schemas.common.enums import AssignmentDurationType, AssignmentStatus
from school_records.schemas.substitute import (
    StudentSummaryDTO,
    SubstituteAssignmentDTO,
    filter_assignments,
)


def _assignment(assignment_id: int, day: date, **kwargs) -> SubstituteAssignmentDTO:
    return SubstituteAssignmentDTO(id=assignment_id, assignment_date=day, **kwargs)


def test_assignment_display_fields():
    full_day = _assignment(1, date(2024, 2, 5), course_names=["Algebra I", "Geometry"])
    hourly = _assignment(
        2,
        date(2024, 2, 5),
        duration_type=AssignmentDurationType.HOURLY,
        start_time=time(10, 0),
        end_time=time(11, 30),
        status=AssignmentStatus.NO_SHOW,
    )

    assert full_day.time_range == "Full Day"
    assert full_day.courses_display == "Algebra I, Geometry"
    assert full_day.display_status == "Pending"
    assert hourly.time_range == "10:00 - 11:30"
    assert hourly.display_status == "No Show"


def test_assignment_covers_multi_day_range():
    assignment = _assignment(1, date(2024, 2, 5), end_date=date(2024, 2, 9))

    assert assignment.covers(date(2024, 2, 7))
    assert not assignment.covers(date(2024, 2, 10))
    assert _assignment(2, date(2024, 2, 5)).covers(date(2024, 2, 5))


def test_filter_assignments_combines_criteria():
    assignments = [
        _assignment(1, date(2024, 2, 6), substitute_id=10, status=AssignmentStatus.CONFIRMED),
        _assignment(2, date(2024, 2, 5), substitute_id=10, status=AssignmentStatus.CONFIRMED,
                    start_time=time(13, 0), end_time=time(15, 0)),
        _assignment(3, date(2024, 2, 5), substitute_id=10, status=AssignmentStatus.CONFIRMED,
                    start_time=time(8, 0), end_time=time(12, 0)),
        _assignment(4, date(2024, 2, 5), substitute_id=11, status=AssignmentStatus.CONFIRMED),
        _assignment(5, date(2024, 3, 1), substitute_id=10, status=AssignmentStatus.CANCELLED),
    ]

    confirmed = filter_assignments(assignments, status=AssignmentStatus.CONFIRMED, substitute_id=10)
    assert [a.id for a in confirmed] == [3, 2, 1]

    february = filter_assignments(assignments, start=date(2024, 2, 6), end=date(2024, 2, 29))
    assert [a.id for a in february] == [1]

    assert len(filter_assignments(assignments)) == 5


def test_student_summary_labels():
    student = StudentSummaryDTO(
        id=1, student_id="S123", first_name="Ada", last_name="Lovelace", grade_level="9"
    )

    assert student.full_name == "Ada Lovelace"
    assert student.display_label == "Lovelace, Ada (S123) - Grade 9"
    assert StudentSummaryDTO(id=2, first_name="Alan", last_name="Turing").display_label == "Turing, Alan"


def test_student_summary_rejects_bad_email():
    with pytest.raises(ValueError):
        StudentSummaryDTO(id=1, first_name="A", last_name="B", email="not-an-email")
