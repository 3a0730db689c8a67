"""
Schedule execution history service.

Keeps the run history of scheduled report jobs in memory, drives each
run record through its lifecycle, and queues a retry record when a run
fails and retries remain.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from school_records.config.logging import LoggingContext
from school_records.config.settings import settings
from school_records.schemas.common.enums import ExecutionStatus
from school_records.schemas.schedule.execution_history import ScheduleExecutionHistory
from school_records.services.base import BaseService, ServiceResult


def _newest_first(executions: Iterable[ScheduleExecutionHistory]) -> List[ScheduleExecutionHistory]:
    def key(execution: ScheduleExecutionHistory):
        started = execution.start_time.timestamp() if execution.start_time else float("-inf")
        return (started, execution.execution_id or 0)

    return sorted(executions, key=key, reverse=True)


class ExecutionHistoryService(BaseService):
    """
    In-memory execution history keyed by schedule id.

    Retry records are separate executions with `triggered_by="RETRY"` and
    a `retry_of` entry in their metadata pointing at the failed run.
    """

    def __init__(
        self,
        max_retry_attempts: Optional[int] = None,
        default_limit: Optional[int] = None,
    ):
        super().__init__()
        self.max_retry_attempts = (
            settings.MAX_RETRY_ATTEMPTS if max_retry_attempts is None else max_retry_attempts
        )
        self.default_limit = default_limit or settings.EXECUTION_HISTORY_LIMIT
        self._history: Dict[int, List[ScheduleExecutionHistory]] = defaultdict(list)
        self._executions: Dict[int, ScheduleExecutionHistory] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_execution(
        self,
        schedule_id: int,
        schedule_name: Optional[str] = None,
        triggered_by: str = "SCHEDULED",
        report_format: Optional[str] = None,
        start_time: Optional[datetime] = None,
    ) -> ServiceResult[ScheduleExecutionHistory]:
        """Create an IN_PROGRESS record for a new run of `schedule_id`."""
        try:
            execution = ScheduleExecutionHistory(
                execution_id=self._next_id(),
                schedule_id=schedule_id,
                schedule_name=schedule_name,
                triggered_by=triggered_by,
                report_format=report_format,
            )
            execution.mark_in_progress(start_time)
        except ValueError as e:
            return self._handle_exception(e, "start execution", schedule_id)

        self._store(execution)
        with LoggingContext(
            self._logger, schedule_id=schedule_id, execution_id=execution.execution_id
        ) as log:
            log.info(f"Executing scheduled report: {schedule_name} (ID={schedule_id})")
        return ServiceResult.success(execution, message="Execution started")

    def complete_execution(
        self,
        execution_id: int,
        output_file_path: Optional[str] = None,
        file_size_bytes: Optional[int] = None,
        recipient_count: Optional[int] = None,
        end_time: Optional[datetime] = None,
    ) -> ServiceResult[ScheduleExecutionHistory]:
        execution, failure = self._get_open_execution(execution_id)
        if failure:
            return failure

        try:
            execution.mark_completed(
                end_time=end_time,
                output_file_path=output_file_path,
                file_size_bytes=file_size_bytes,
                recipient_count=recipient_count,
            )
        except ValueError as e:
            return self._handle_exception(e, "complete execution", execution_id)

        self._logger.info(
            f"Schedule execution completed successfully: {execution.schedule_id} "
            f"(execution {execution_id}, {execution.get_duration_seconds()}s)"
        )
        return ServiceResult.success(execution, message="Execution completed")

    def fail_execution(
        self,
        execution_id: int,
        error_message: str,
        stack_trace: Optional[str] = None,
        end_time: Optional[datetime] = None,
    ) -> ServiceResult[ScheduleExecutionHistory]:
        """
        Mark a run failed and queue a retry while attempts remain.

        The result metadata carries `retry_execution_id` (None when no
        retry was queued).
        """
        execution, failure = self._get_open_execution(execution_id)
        if failure:
            return failure

        try:
            execution.mark_failed(error_message, stack_trace=stack_trace, end_time=end_time)
        except ValueError as e:
            return self._handle_exception(e, "fail execution", execution_id)

        with LoggingContext(
            self._logger, schedule_id=execution.schedule_id, execution_id=execution_id
        ) as log:
            log.error(f"Schedule execution failed: {error_message}")

        retry_id = None
        if execution.retry_attempt < self.max_retry_attempts:
            retry = self._queue_retry(execution)
            retry_id = retry.execution_id

        return ServiceResult.success(
            execution,
            message="Execution failed",
            metadata={"retry_execution_id": retry_id},
        )

    def cancel_execution(self, execution_id: int) -> ServiceResult[ScheduleExecutionHistory]:
        execution, failure = self._get_open_execution(execution_id)
        if failure:
            return failure

        execution.mark_cancelled()
        self._logger.info(f"Schedule execution cancelled: {execution_id}")
        return ServiceResult.success(execution, message="Execution cancelled")

    def _queue_retry(self, failed: ScheduleExecutionHistory) -> ScheduleExecutionHistory:
        retry = ScheduleExecutionHistory(
            execution_id=self._next_id(),
            schedule_id=failed.schedule_id,
            schedule_name=failed.schedule_name,
            report_format=failed.report_format,
            start_time=datetime.now(timezone.utc),
            retry_attempt=failed.retry_attempt,
            triggered_by="RETRY",
            metadata={"retry_of": failed.execution_id},
        )
        retry.mark_retrying()
        self._store(retry)

        self._logger.info(
            f"Scheduling retry for schedule {failed.schedule_id} "
            f"(attempt {retry.retry_attempt}/{self.max_retry_attempts})"
        )
        return retry

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_execution(self, execution_id: int) -> ServiceResult[ScheduleExecutionHistory]:
        execution = self._executions.get(execution_id)
        if execution is None:
            return ServiceResult.not_found("Execution", execution_id)
        return ServiceResult.success(execution)

    def get_execution_history(
        self,
        schedule_id: int,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[ScheduleExecutionHistory]]:
        """History of one schedule, newest first. Unknown schedules yield an empty list."""
        return self._limited(self._history.get(schedule_id, []), limit)

    def get_all_execution_history(
        self,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[ScheduleExecutionHistory]]:
        return self._limited(self._executions.values(), limit)

    def get_failed_executions(
        self,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[ScheduleExecutionHistory]]:
        return self._limited(
            (e for e in self._executions.values() if e.is_failed()),
            limit,
        )

    def get_statistics(self) -> ServiceResult[Dict[str, Any]]:
        executions = list(self._executions.values())
        finished = [e for e in executions if e.is_finished()]
        successful = sum(1 for e in executions if e.is_successful())
        durations = [e.duration_ms for e in finished if e.duration_ms is not None]

        stats: Dict[str, Any] = {
            "total_executions": len(executions),
            "successful_executions": successful,
            "failed_executions": sum(1 for e in executions if e.is_failed()),
            "cancelled_executions": sum(
                1 for e in executions if e.status == ExecutionStatus.CANCELLED
            ),
            "running_executions": sum(1 for e in executions if e.is_running()),
            "schedules_tracked": len(self._history),
            "success_rate": round(successful * 100.0 / len(finished), 2) if finished else 0.0,
            "average_duration_seconds": (
                round(sum(durations) / len(durations) / 1000.0, 3) if durations else None
            ),
            "timestamp": datetime.now(timezone.utc),
        }
        return ServiceResult.success(stats)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _store(self, execution: ScheduleExecutionHistory) -> None:
        self._executions[execution.execution_id] = execution
        self._history[execution.schedule_id].append(execution)

    def _get_open_execution(self, execution_id: int):
        execution = self._executions.get(execution_id)
        if execution is None:
            self._logger.warning(f"Execution not found: {execution_id}")
            return None, ServiceResult.not_found("Execution", execution_id)
        if execution.is_finished():
            return None, ServiceResult.invalid_state(
                f"Execution {execution_id} already finished",
                current_state=execution.status.value,
            )
        return execution, None

    def _limited(
        self,
        executions: Iterable[ScheduleExecutionHistory],
        limit: Optional[int],
    ) -> ServiceResult[List[ScheduleExecutionHistory]]:
        limit = self.default_limit if limit is None else limit
        if limit < 1:
            return ServiceResult.validation_failure("limit must be at least 1", field="limit")
        return ServiceResult.success(_newest_first(executions)[:limit])
