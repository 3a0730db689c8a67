# --- File: school_records/schemas/schedule/execution_history.py ---
"""
Schedule execution history schema.

One record per run of a scheduled report job, including retries.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import Field, computed_field

from school_records.schemas.common.base import BaseSchema
from school_records.schemas.common.enums import ExecutionStatus

__all__ = ["ScheduleExecutionHistory"]

RUNNING_STATUSES = frozenset(
    {ExecutionStatus.PENDING, ExecutionStatus.IN_PROGRESS, ExecutionStatus.RETRYING}
)
TERMINAL_STATUSES = frozenset(
    {ExecutionStatus.COMPLETED, ExecutionStatus.FAILED, ExecutionStatus.CANCELLED}
)

_SIZE_UNITS = ("KB", "MB", "GB")


class ScheduleExecutionHistory(BaseSchema):
    """Run record of a scheduled report job."""

    execution_id: Optional[int] = Field(default=None)
    schedule_id: int = Field(..., description="Schedule that produced this run")
    schedule_name: Optional[str] = Field(default=None)
    status: ExecutionStatus = Field(default=ExecutionStatus.PENDING)

    start_time: Optional[datetime] = Field(default=None)
    end_time: Optional[datetime] = Field(default=None)
    duration_ms: Optional[int] = Field(default=None, ge=0)

    # Output
    report_format: Optional[str] = Field(default=None, description="PDF, CSV, XLSX, ...")
    output_file_path: Optional[str] = Field(default=None)
    file_size_bytes: Optional[int] = Field(default=None, ge=0)
    recipient_count: int = Field(default=0, ge=0)

    # Failure details
    error_message: Optional[str] = Field(default=None)
    stack_trace: Optional[str] = Field(default=None)
    retry_attempt: int = Field(default=0, ge=0)

    triggered_by: str = Field(default="SCHEDULED", description="SCHEDULED, MANUAL or RETRY")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Status checks
    # ------------------------------------------------------------------

    def is_successful(self) -> bool:
        return self.status == ExecutionStatus.COMPLETED

    def is_failed(self) -> bool:
        return self.status == ExecutionStatus.FAILED

    def is_running(self) -> bool:
        return self.status in RUNNING_STATUSES

    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def get_duration_seconds(self) -> Optional[float]:
        if self.duration_ms is None:
            return None
        return self.duration_ms / 1000.0

    def get_formatted_file_size(self) -> str:
        if self.file_size_bytes is None:
            return "N/A"
        size = float(self.file_size_bytes)
        if size < 1024:
            return f"{self.file_size_bytes} B"
        for unit in _SIZE_UNITS:
            size /= 1024
            if size < 1024 or unit == _SIZE_UNITS[-1]:
                return f"{size:.1f} {unit}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_seconds(self) -> Optional[float]:
        return self.get_duration_seconds()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_file_size(self) -> str:
        return self.get_formatted_file_size()

    # ------------------------------------------------------------------
    # Lifecycle helpers
    # ------------------------------------------------------------------

    def mark_in_progress(self, start_time: Optional[datetime] = None) -> None:
        self.start_time = start_time or datetime.now(timezone.utc)
        self.status = ExecutionStatus.IN_PROGRESS

    def mark_completed(
        self,
        end_time: Optional[datetime] = None,
        output_file_path: Optional[str] = None,
        file_size_bytes: Optional[int] = None,
        recipient_count: Optional[int] = None,
    ) -> None:
        self._finish(ExecutionStatus.COMPLETED, end_time)
        if output_file_path is not None:
            self.output_file_path = output_file_path
        if file_size_bytes is not None:
            self.file_size_bytes = file_size_bytes
        if recipient_count is not None:
            self.recipient_count = recipient_count

    def mark_failed(
        self,
        error_message: str,
        stack_trace: Optional[str] = None,
        end_time: Optional[datetime] = None,
    ) -> None:
        self._finish(ExecutionStatus.FAILED, end_time)
        self.error_message = error_message
        self.stack_trace = stack_trace

    def mark_cancelled(self, end_time: Optional[datetime] = None) -> None:
        self._finish(ExecutionStatus.CANCELLED, end_time)

    def mark_retrying(self) -> None:
        """Flag the run for another attempt and bump the retry counter."""
        self.retry_attempt += 1
        self.status = ExecutionStatus.RETRYING

    def _finish(self, status: ExecutionStatus, end_time: Optional[datetime]) -> None:
        if end_time is None:
            tz = self.start_time.tzinfo if self.start_time is not None else timezone.utc
            end_time = datetime.now(tz)
        elif self.start_time is not None:
            end_time = _align_to(end_time, self.start_time)

        duration_ms = self.duration_ms
        if self.start_time is not None:
            elapsed = end_time - self.start_time
            duration_ms = max(0, int(elapsed.total_seconds() * 1000))

        self.end_time = end_time
        self.duration_ms = duration_ms
        self.status = status


def _align_to(value: datetime, reference: datetime) -> datetime:
    """
    Give `value` the same awareness as `reference`.

    A naive value is read in the reference's timezone; an aware value
    paired with a naive reference is converted to UTC and made naive.
    """
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
