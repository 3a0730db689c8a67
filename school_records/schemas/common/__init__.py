"""
Common schema building blocks.
"""

from school_records.schemas.common.base import AuditMixin, BaseSchema, TimestampMixin
from school_records.schemas.common.enums import (
    AssignmentDurationType,
    AssignmentStatus,
    Decision,
    ExecutionStatus,
    PeriodType,
    ScheduleType,
    SeverityLevel,
    TrendDirection,
)

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "AuditMixin",
    "Decision",
    "ExecutionStatus",
    "ScheduleType",
    "PeriodType",
    "TrendDirection",
    "AssignmentStatus",
    "AssignmentDurationType",
    "SeverityLevel",
]
