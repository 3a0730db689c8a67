"""
Scheduling schemas package.

Bell schedules, their periods, and the run history of scheduled
report jobs.
"""

from school_records.schemas.schedule.bell_schedule import BellScheduleDTO, PeriodTimerDTO
from school_records.schemas.schedule.execution_history import ScheduleExecutionHistory
from school_records.schemas.schedule.execution_requests import (
    ExecutionCompleteRequest,
    ExecutionFailRequest,
    ExecutionStartRequest,
)

__all__ = [
    "BellScheduleDTO",
    "PeriodTimerDTO",
    "ScheduleExecutionHistory",
    "ExecutionStartRequest",
    "ExecutionCompleteRequest",
    "ExecutionFailRequest",
]
