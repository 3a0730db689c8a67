# --- File: school_records/schemas/attendance/attendance_statistics.py ---
"""
Attendance statistics schemas.

Read model for aggregated attendance over a reporting period: overall
totals, per-day and per-grade breakdowns, a simple trend summary and
the students with the most absences. Rates are percentages rounded to
two decimal places.
"""

from datetime import date as Date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Union

from pydantic import Field, computed_field, model_validator

from school_records.config.settings import settings
from school_records.schemas.common.base import BaseSchema
from school_records.schemas.common.enums import TrendDirection

__all__ = [
    "OverallStats",
    "DailyStats",
    "TrendAnalysis",
    "GradeStats",
    "StudentAbsenceRecord",
    "AttendanceStatistics",
    "calculate_rate",
]

_TWO_PLACES = Decimal("0.01")

# A change smaller than this many percentage points counts as stable.
TREND_STABILITY_BAND = Decimal("1.00")


def calculate_rate(part: int, whole: int) -> Decimal:
    """Percentage of `part` in `whole`, 0 when `whole` is zero."""
    if not whole:
        return Decimal("0.00")
    return (Decimal(part) * 100 / Decimal(whole)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP
    )


class OverallStats(BaseSchema):
    """Totals for the whole period. Tardy students count as attending."""

    total_records: int = Field(default=0, ge=0, description="Attendance records in period")
    present_count: int = Field(default=0, ge=0)
    absent_count: int = Field(default=0, ge=0)
    tardy_count: int = Field(default=0, ge=0)
    excused_count: int = Field(default=0, ge=0, description="Absences with an excuse")
    unexcused_count: int = Field(default=0, ge=0, description="Absences without an excuse")
    unique_students: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def attendance_rate(self) -> Decimal:
        return calculate_rate(self.present_count + self.tardy_count, self.total_records)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def absence_rate(self) -> Decimal:
        return calculate_rate(self.absent_count, self.total_records)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tardy_rate(self) -> Decimal:
        return calculate_rate(self.tardy_count, self.total_records)


class DailyStats(BaseSchema):
    """Attendance counts for one school day."""

    date: Date = Field(..., description="School day")
    total_records: int = Field(default=0, ge=0)
    present_count: int = Field(default=0, ge=0)
    absent_count: int = Field(default=0, ge=0)
    tardy_count: int = Field(default=0, ge=0)
    excused_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def attendance_rate(self) -> Decimal:
        return calculate_rate(self.present_count + self.tardy_count, self.total_records)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def day_of_week(self) -> str:
        return self.date.strftime("%A")


class TrendAnalysis(BaseSchema):
    """
    Direction of attendance across the period.

    Compares the average daily rate of the first half of the period with
    the second half.
    """

    direction: TrendDirection = Field(default=TrendDirection.STABLE)
    first_period_rate: Decimal = Field(default=Decimal("0.00"), ge=0, le=100)
    second_period_rate: Decimal = Field(default=Decimal("0.00"), ge=0, le=100)
    change_percentage: Decimal = Field(
        default=Decimal("0.00"),
        description="Second half minus first half, in percentage points",
    )
    weekly_averages: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Average daily rate keyed by ISO week (YYYY-Www)",
    )
    best_day: Union[Date, None] = Field(default=None)
    worst_day: Union[Date, None] = Field(default=None)

    @classmethod
    def from_daily(cls, daily: List[DailyStats]) -> "TrendAnalysis":
        """Derive the trend from per-day rows (any order)."""
        days = sorted((d for d in daily if d.total_records), key=lambda d: d.date)
        if not days:
            return cls()

        weeks: Dict[str, List[Decimal]] = {}
        for day in days:
            year, week, _ = day.date.isocalendar()
            weeks.setdefault(f"{year}-W{week:02d}", []).append(day.attendance_rate)
        weekly_averages = {
            key: _average(rates) for key, rates in weeks.items()
        }

        best = max(days, key=lambda d: d.attendance_rate)
        worst = min(days, key=lambda d: d.attendance_rate)

        if len(days) < 2:
            rate = days[0].attendance_rate
            return cls(
                first_period_rate=rate,
                second_period_rate=rate,
                weekly_averages=weekly_averages,
                best_day=best.date,
                worst_day=worst.date,
            )

        middle = len(days) // 2
        first = _average([d.attendance_rate for d in days[:middle]])
        second = _average([d.attendance_rate for d in days[middle:]])
        change = second - first

        if change >= TREND_STABILITY_BAND:
            direction = TrendDirection.IMPROVING
        elif change <= -TREND_STABILITY_BAND:
            direction = TrendDirection.DECLINING
        else:
            direction = TrendDirection.STABLE

        return cls(
            direction=direction,
            first_period_rate=first,
            second_period_rate=second,
            change_percentage=change,
            weekly_averages=weekly_averages,
            best_day=best.date,
            worst_day=worst.date,
        )


class GradeStats(BaseSchema):
    """Attendance for one grade level."""

    grade_level: str = Field(..., min_length=1)
    student_count: int = Field(default=0, ge=0)
    total_records: int = Field(default=0, ge=0)
    present_count: int = Field(default=0, ge=0)
    absent_count: int = Field(default=0, ge=0)
    tardy_count: int = Field(default=0, ge=0)
    chronic_absentee_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def attendance_rate(self) -> Decimal:
        return calculate_rate(self.present_count + self.tardy_count, self.total_records)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def chronic_absentee_rate(self) -> Decimal:
        return calculate_rate(self.chronic_absentee_count, self.student_count)


class StudentAbsenceRecord(BaseSchema):
    """Absence summary for one student, used for top-absentee lists."""

    student_id: int = Field(..., description="Student identifier")
    student_number: Optional[str] = Field(default=None)
    student_name: str = Field(..., min_length=1)
    grade_level: Optional[str] = Field(default=None)
    total_days: int = Field(default=0, ge=0, description="Enrolled school days in period")
    absence_count: int = Field(default=0, ge=0)
    excused_count: int = Field(default=0, ge=0)
    tardy_count: int = Field(default=0, ge=0)
    last_absence_date: Union[Date, None] = Field(default=None)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def absence_rate(self) -> Decimal:
        return calculate_rate(self.absence_count, self.total_days)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unexcused_count(self) -> int:
        return max(0, self.absence_count - self.excused_count)

    def is_chronically_absent(self, threshold: Optional[float] = None) -> bool:
        """
        Whether the absence rate reaches the chronic absence threshold.

        Defaults to CHRONIC_ABSENCE_THRESHOLD from settings.
        """
        if threshold is None:
            threshold = settings.CHRONIC_ABSENCE_THRESHOLD
        return self.total_days > 0 and self.absence_rate >= Decimal(str(threshold))


class AttendanceStatistics(BaseSchema):
    """Aggregated attendance metrics for a reporting period."""

    start_date: Date = Field(..., description="First day of the period (inclusive)")
    end_date: Date = Field(..., description="Last day of the period (inclusive)")
    campus_id: Optional[int] = Field(default=None)
    campus_name: Optional[str] = Field(default=None)

    overall: OverallStats = Field(default_factory=OverallStats)
    daily_stats: List[DailyStats] = Field(default_factory=list)
    trend: Optional[TrendAnalysis] = Field(default=None)
    grade_stats: List[GradeStats] = Field(default_factory=list)
    top_absentees: List[StudentAbsenceRecord] = Field(default_factory=list)

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_period(self) -> "AttendanceStatistics":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be after or equal to start_date")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def period_days(self) -> int:
        """Calendar days in the period, inclusive."""
        return (self.end_date - self.start_date).days + 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def meets_attendance_target(self) -> bool:
        return self.overall.attendance_rate >= Decimal(str(settings.LOW_ATTENDANCE_THRESHOLD))

    def get_daily_stats(self, day: Date) -> Optional[DailyStats]:
        return next((d for d in self.daily_stats if d.date == day), None)

    def get_grade_stats(self, grade_level: str) -> Optional[GradeStats]:
        return next((g for g in self.grade_stats if g.grade_level == grade_level), None)

    def chronic_absentees(self, threshold: Optional[float] = None) -> List[StudentAbsenceRecord]:
        """Top absentees at or above the threshold, highest rate first."""
        flagged = [s for s in self.top_absentees if s.is_chronically_absent(threshold)]
        return sorted(flagged, key=lambda s: s.absence_rate, reverse=True)

    @classmethod
    def from_daily(
        cls,
        start_date: Date,
        end_date: Date,
        daily_stats: List[DailyStats],
        unique_students: int = 0,
        unexcused_count: Optional[int] = None,
        **kwargs,
    ) -> "AttendanceStatistics":
        """
        Assemble statistics from per-day rows.

        Overall totals are the sum of the daily rows; the trend is derived
        from them. Rows outside the period are ignored.
        """
        rows = [d for d in daily_stats if start_date <= d.date <= end_date]
        absent = sum(d.absent_count for d in rows)
        excused = sum(d.excused_count for d in rows)
        overall = OverallStats(
            total_records=sum(d.total_records for d in rows),
            present_count=sum(d.present_count for d in rows),
            absent_count=absent,
            tardy_count=sum(d.tardy_count for d in rows),
            excused_count=excused,
            unexcused_count=(
                unexcused_count if unexcused_count is not None else max(0, absent - excused)
            ),
            unique_students=unique_students,
        )
        return cls(
            start_date=start_date,
            end_date=end_date,
            overall=overall,
            daily_stats=sorted(rows, key=lambda d: d.date),
            trend=TrendAnalysis.from_daily(rows),
            **kwargs,
        )


def _average(rates: List[Decimal]) -> Decimal:
    if not rates:
        return Decimal("0.00")
    return (sum(rates, Decimal("0")) / len(rates)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP
    )
