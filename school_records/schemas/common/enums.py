# --- File: school_records/schemas/common/enums.py ---
"""
Enumeration types shared across the schema packages.

Enums that only make sense inside a single schema (OLAP drill types,
post-quantum algorithm names, ...) live next to that schema instead.
"""

from enum import Enum

__all__ = [
    "Decision",
    "ExecutionStatus",
    "ScheduleType",
    "PeriodType",
    "TrendDirection",
    "AssignmentStatus",
    "AssignmentDurationType",
    "SeverityLevel",
]


class Decision(str, Enum):
    """Outcome of a permission check."""

    GRANTED = "GRANTED"
    DENIED = "DENIED"
    CONDITIONAL = "CONDITIONAL"


class ExecutionStatus(str, Enum):
    """Lifecycle status of one scheduled report run."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    RETRYING = "RETRYING"
    CANCELLED = "CANCELLED"


class ScheduleType(str, Enum):
    """Bell schedule variants."""

    REGULAR = "REGULAR"
    EARLY_DISMISSAL = "EARLY_DISMISSAL"
    LATE_START = "LATE_START"
    ASSEMBLY = "ASSEMBLY"
    EXAM = "EXAM"
    MINIMUM_DAY = "MINIMUM_DAY"
    EMERGENCY = "EMERGENCY"
    CUSTOM = "CUSTOM"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class PeriodType(str, Enum):
    """Kind of block inside a bell schedule."""

    CLASS = "CLASS"
    HOMEROOM = "HOMEROOM"
    LUNCH = "LUNCH"
    BREAK = "BREAK"
    PASSING = "PASSING"
    ADVISORY = "ADVISORY"
    ASSEMBLY = "ASSEMBLY"


class TrendDirection(str, Enum):
    """Direction of an attendance trend."""

    IMPROVING = "IMPROVING"
    DECLINING = "DECLINING"
    STABLE = "STABLE"


class AssignmentStatus(str, Enum):
    """Substitute assignment status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class AssignmentDurationType(str, Enum):
    """How much of the day a substitute covers."""

    FULL_DAY = "FULL_DAY"
    HALF_DAY_AM = "HALF_DAY_AM"
    HALF_DAY_PM = "HALF_DAY_PM"
    HOURLY = "HOURLY"
    MULTI_DAY = "MULTI_DAY"
    LONG_TERM = "LONG_TERM"


class SeverityLevel(str, Enum):
    """Generic severity scale used by the report schemas."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"
