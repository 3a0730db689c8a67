from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from school_records.schemas.common.enums import ExecutionStatus
from school_records.schemas.schedule import ScheduleExecutionHistory
from school_records.services.base import ErrorCode
from school_records.services.execution_history_service import ExecutionHistoryService

BASE = datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "size, expected",
    [
        (None, "N/A"),
        (512, "512 B"),
        (2048, "2.0 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
    ],
)
def test_formatted_file_size(size, expected):
    execution = ScheduleExecutionHistory(schedule_id=1, file_size_bytes=size)

    assert execution.get_formatted_file_size() == expected


def test_lifecycle_records_duration():
    execution = ScheduleExecutionHistory(schedule_id=1)
    assert execution.is_running()
    assert execution.get_duration_seconds() is None

    execution.mark_in_progress(BASE)
    execution.mark_completed(end_time=BASE + timedelta(seconds=2.5), recipient_count=4)

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.duration_ms == 2500
    assert execution.duration_seconds == 2.5
    assert execution.recipient_count == 4
    assert execution.is_successful() and execution.is_finished()


def test_mark_failed_and_retrying():
    execution = ScheduleExecutionHistory(schedule_id=1, start_time=BASE)

    execution.mark_failed("SMTP timeout", end_time=BASE + timedelta(seconds=1))
    assert execution.is_failed()
    assert execution.error_message == "SMTP timeout"

    execution.mark_retrying()
    assert execution.status == ExecutionStatus.RETRYING
    assert execution.retry_attempt == 1


def test_naive_end_time_is_read_in_start_timezone():
    execution = ScheduleExecutionHistory(schedule_id=1, start_time=BASE)

    execution.mark_completed(end_time=datetime(2024, 3, 1, 6, 0, 3))

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.end_time == BASE + timedelta(seconds=3)
    assert execution.end_time.tzinfo is not None
    assert execution.duration_ms == 3000


def test_aware_end_time_against_naive_start_is_converted_to_utc():
    execution = ScheduleExecutionHistory(schedule_id=1, start_time=datetime(2024, 3, 1, 6, 0))
    eastern = timezone(timedelta(hours=-5))

    execution.mark_failed("timeout", end_time=datetime(2024, 3, 1, 1, 0, 1, tzinfo=eastern))

    assert execution.is_failed()
    assert execution.end_time == datetime(2024, 3, 1, 6, 0, 1)
    assert execution.duration_ms == 1000
    assert execution.error_message == "timeout"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


def test_start_and_complete():
    svc = ExecutionHistoryService()

    started = svc.start_execution(7, schedule_name="Daily absences", report_format="PDF").unwrap()
    assert started.status == ExecutionStatus.IN_PROGRESS
    assert started.start_time is not None

    done = svc.complete_execution(
        started.execution_id, output_file_path="/tmp/report.pdf", file_size_bytes=2048
    ).unwrap()
    assert done.is_successful()
    assert done.formatted_file_size == "2.0 KB"


def test_failure_queues_retries_until_limit():
    svc = ExecutionHistoryService(max_retry_attempts=2)
    first = svc.start_execution(7).unwrap()

    result = svc.fail_execution(first.execution_id, "database unavailable")
    assert result.data.status == ExecutionStatus.FAILED

    retry_id = result.metadata["retry_execution_id"]
    retry = svc.get_execution(retry_id).unwrap()
    assert retry.status == ExecutionStatus.RETRYING
    assert retry.triggered_by == "RETRY"
    assert retry.retry_attempt == 1
    assert retry.metadata == {"retry_of": first.execution_id}

    second_retry_id = svc.fail_execution(retry_id, "still down").metadata["retry_execution_id"]
    assert svc.get_execution(second_retry_id).unwrap().retry_attempt == 2

    exhausted = svc.fail_execution(second_retry_id, "gave up")
    assert exhausted.metadata["retry_execution_id"] is None
    assert len(svc.get_failed_executions().unwrap()) == 3


def test_finished_execution_cannot_change():
    svc = ExecutionHistoryService()
    execution = svc.start_execution(1).unwrap()
    svc.cancel_execution(execution.execution_id)

    result = svc.complete_execution(execution.execution_id)

    assert result.error.code == ErrorCode.INVALID_STATE
    assert result.error.details == {"current_state": "CANCELLED"}


def test_unknown_execution():
    svc = ExecutionHistoryService()

    assert svc.get_execution(404).error.code == ErrorCode.NOT_FOUND
    assert svc.fail_execution(404, "boom").error.code == ErrorCode.NOT_FOUND


def test_history_newest_first_with_limit():
    svc = ExecutionHistoryService()
    for hours in (0, 2, 1):
        svc.start_execution(5, start_time=BASE + timedelta(hours=hours))
    svc.start_execution(6, start_time=BASE)

    history = svc.get_execution_history(5, limit=2).unwrap()

    assert [e.start_time for e in history] == [BASE + timedelta(hours=2), BASE + timedelta(hours=1)]
    assert len(svc.get_all_execution_history().unwrap()) == 4
    assert svc.get_execution_history(99).unwrap() == []


def test_history_default_limit():
    svc = ExecutionHistoryService(default_limit=2)
    for _ in range(3):
        svc.start_execution(5)

    assert len(svc.get_execution_history(5).unwrap()) == 2


def test_history_rejects_non_positive_limit():
    svc = ExecutionHistoryService()

    result = svc.get_all_execution_history(limit=0)

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "limit"


def test_statistics():
    svc = ExecutionHistoryService(max_retry_attempts=0)
    ok = svc.start_execution(1, start_time=BASE).unwrap()
    bad = svc.start_execution(1, start_time=BASE).unwrap()
    cancelled = svc.start_execution(2).unwrap()
    svc.start_execution(3)

    svc.complete_execution(ok.execution_id, end_time=BASE + timedelta(seconds=2))
    svc.fail_execution(bad.execution_id, "error", end_time=BASE + timedelta(seconds=4))
    svc.cancel_execution(cancelled.execution_id)

    stats = svc.get_statistics().unwrap()

    assert stats["total_executions"] == 4
    assert stats["successful_executions"] == 1
    assert stats["failed_executions"] == 1
    assert stats["cancelled_executions"] == 1
    assert stats["running_executions"] == 1
    assert stats["schedules_tracked"] == 3
    assert stats["success_rate"] == 33.33


def test_complete_with_naive_end_time():
    svc = ExecutionHistoryService()
    execution = svc.start_execution(8, start_time=BASE).unwrap()

    result = svc.complete_execution(execution.execution_id, end_time=datetime(2024, 3, 1, 6, 0, 5))

    assert result.is_success
    assert result.data.is_successful()
    assert result.data.duration_ms == 5000
    assert result.data.end_time == BASE + timedelta(seconds=5)


def test_fail_with_naive_end_time():
    svc = ExecutionHistoryService(max_retry_attempts=0)
    execution = svc.start_execution(8, start_time=BASE).unwrap()

    result = svc.fail_execution(
        execution.execution_id, "renderer crashed", end_time=datetime(2024, 3, 1, 6, 1)
    )

    assert result.is_success
    failed = svc.get_execution(execution.execution_id).unwrap()
    assert failed.status == ExecutionStatus.FAILED
    assert failed.error_message == "renderer crashed"
    assert failed.duration_ms == 60000
    assert failed.end_time.tzinfo is not None
