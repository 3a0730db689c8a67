"""
Attendance schemas package.
"""

from school_records.schemas.attendance.attendance_statistics import (
    AttendanceStatistics,
    DailyStats,
    GradeStats,
    OverallStats,
    StudentAbsenceRecord,
    TrendAnalysis,
    calculate_rate,
)

__all__ = [
    "AttendanceStatistics",
    "OverallStats",
    "DailyStats",
    "TrendAnalysis",
    "GradeStats",
    "StudentAbsenceRecord",
    "calculate_rate",
]
