# --- File: school_records/schemas/schedule/bell_schedule.py ---
"""
Bell schedule transport schemas.

Flattened view of a bell schedule and its periods, with the display
flags the scheduling screens need precomputed.
"""

from datetime import date as Date, datetime, time, timezone
from typing import List, Optional

from pydantic import Field, computed_field, field_validator, model_validator

from school_records.schemas.common.base import BaseSchema, TimestampMixin
from school_records.schemas.common.enums import PeriodType, ScheduleType

__all__ = [
    "PeriodTimerDTO",
    "BellScheduleDTO",
]

# ISO weekday numbers, Monday=1 ... Sunday=7
WEEKDAYS = [1, 2, 3, 4, 5]


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


class PeriodTimerDTO(BaseSchema):
    """One timed block of a bell schedule."""

    id: Optional[int] = Field(default=None, description="Period identifier")
    period_number: int = Field(..., ge=0, description="Ordinal of the period in the day")
    period_name: str = Field(..., min_length=1, max_length=100)
    start_time: time = Field(..., description="Start of the period")
    end_time: time = Field(..., description="End of the period")
    period_type: PeriodType = Field(default=PeriodType.CLASS)
    warning_minutes: int = Field(
        default=0,
        ge=0,
        le=30,
        description="Minutes before end_time to sound the warning bell",
    )

    @model_validator(mode="after")
    def validate_times(self) -> "PeriodTimerDTO":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_minutes(self) -> int:
        return _minutes(self.end_time) - _minutes(self.start_time)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_time(self) -> str:
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"

    def overlaps(self, other: "PeriodTimerDTO") -> bool:
        """Whether the two periods share any time. Touching ends do not overlap."""
        return self.start_time < other.end_time and other.start_time < self.end_time


class BellScheduleDTO(BaseSchema, TimestampMixin):
    """
    Bell schedule for a campus and academic year.

    A schedule either applies on its listed `specific_dates` (date
    overrides such as exam days) or, when it has none, on every day in
    `days_of_week`.
    """

    id: Optional[int] = Field(default=None, description="Schedule identifier")
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    schedule_type: ScheduleType = Field(default=ScheduleType.REGULAR)

    campus_id: Optional[int] = Field(default=None)
    campus_name: Optional[str] = Field(default=None)
    academic_year_id: Optional[int] = Field(default=None)
    academic_year_name: Optional[str] = Field(default=None)

    is_default: bool = Field(default=False, description="Campus fallback schedule")
    is_active: bool = Field(default=True)

    specific_dates: Optional[List[Date]] = Field(
        default_factory=list,
        description="Dates this schedule overrides",
    )
    days_of_week: List[int] = Field(
        default_factory=lambda: list(WEEKDAYS),
        description="ISO weekdays (Monday=1) the schedule runs on",
    )
    periods: Optional[List[PeriodTimerDTO]] = Field(default_factory=list)

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: List[int]) -> List[int]:
        for day in v:
            if day < 1 or day > 7:
                raise ValueError(f"days_of_week values must be 1-7, got {day}")
        return sorted(set(v))

    # ------------------------------------------------------------------
    # Display flags
    # ------------------------------------------------------------------

    @computed_field  # type: ignore[prop-decorator]
    @property
    def period_count(self) -> int:
        return len(self.periods or [])

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_specific_dates(self) -> bool:
        return bool(self.specific_dates)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_special_schedule(self) -> bool:
        return self.schedule_type != ScheduleType.REGULAR

    @computed_field  # type: ignore[prop-decorator]
    @property
    def start_time(self) -> Optional[time]:
        """Start of the earliest period."""
        if not self.periods:
            return None
        return min(p.start_time for p in self.periods)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_time(self) -> Optional[time]:
        """End of the latest period."""
        if not self.periods:
            return None
        return max(p.end_time for p in self.periods)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        if self.is_special_schedule:
            return f"{self.name} ({self.schedule_type.display_name})"
        return self.name

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def sorted_periods(self) -> List[PeriodTimerDTO]:
        return sorted(self.periods or [], key=lambda p: (p.start_time, p.period_number))

    def add_period(self, period: PeriodTimerDTO) -> None:
        if self.periods is None:
            self.periods = []
        self.periods.append(period)

    def remove_period(self, period_id: int) -> bool:
        """Drop the period with `period_id`; False when it is not present."""
        if not self.periods:
            return False
        remaining = [p for p in self.periods if p.id != period_id]
        if len(remaining) == len(self.periods):
            return False
        self.periods = remaining
        return True

    def find_overlapping(self, period: PeriodTimerDTO) -> List[PeriodTimerDTO]:
        return [
            p for p in (self.periods or [])
            if p is not period and p.overlaps(period)
        ]

    def add_specific_date(self, day: Date) -> None:
        if self.specific_dates is None:
            self.specific_dates = []
        if day not in self.specific_dates:
            self.specific_dates.append(day)

    def applies_to(self, day: Date) -> bool:
        """Whether the schedule runs on `day`. Inactive schedules never apply."""
        if not self.is_active:
            return False
        if self.specific_dates:
            return day in self.specific_dates
        return day.isoweekday() in self.days_of_week

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
