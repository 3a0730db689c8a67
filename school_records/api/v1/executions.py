"""
Scheduled report execution history endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from school_records.api.deps import get_execution_history_service
from school_records.schemas.schedule.execution_history import ScheduleExecutionHistory
from school_records.schemas.schedule.execution_requests import (
    ExecutionCompleteRequest,
    ExecutionFailRequest,
    ExecutionStartRequest,
)
from school_records.services.execution_history_service import ExecutionHistoryService

router = APIRouter(prefix="/schedule-executions")


@router.post("", response_model=ScheduleExecutionHistory, status_code=status.HTTP_201_CREATED)
def start_execution(
    payload: ExecutionStartRequest,
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> ScheduleExecutionHistory:
    return service.start_execution(
        payload.schedule_id,
        schedule_name=payload.schedule_name,
        triggered_by=payload.triggered_by,
        report_format=payload.report_format,
    ).unwrap()


@router.get("", response_model=List[ScheduleExecutionHistory])
def list_executions(
    limit: Optional[int] = Query(default=None, ge=1),
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> List[ScheduleExecutionHistory]:
    return service.get_all_execution_history(limit).unwrap()


@router.get("/failed", response_model=List[ScheduleExecutionHistory])
def list_failed_executions(
    limit: Optional[int] = Query(default=None, ge=1),
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> List[ScheduleExecutionHistory]:
    return service.get_failed_executions(limit).unwrap()


@router.get("/statistics")
def execution_statistics(
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> Dict[str, Any]:
    return service.get_statistics().unwrap()


@router.get("/schedules/{schedule_id}", response_model=List[ScheduleExecutionHistory])
def schedule_history(
    schedule_id: int,
    limit: Optional[int] = Query(default=None, ge=1),
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> List[ScheduleExecutionHistory]:
    return service.get_execution_history(schedule_id, limit).unwrap()


@router.get("/{execution_id}", response_model=ScheduleExecutionHistory)
def get_execution(
    execution_id: int,
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> ScheduleExecutionHistory:
    return service.get_execution(execution_id).unwrap()


@router.post("/{execution_id}/complete", response_model=ScheduleExecutionHistory)
def complete_execution(
    execution_id: int,
    payload: ExecutionCompleteRequest,
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> ScheduleExecutionHistory:
    return service.complete_execution(
        execution_id,
        output_file_path=payload.output_file_path,
        file_size_bytes=payload.file_size_bytes,
        recipient_count=payload.recipient_count,
    ).unwrap()


@router.post("/{execution_id}/fail", response_model=ScheduleExecutionHistory)
def fail_execution(
    execution_id: int,
    payload: ExecutionFailRequest,
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> ScheduleExecutionHistory:
    return service.fail_execution(
        execution_id,
        payload.error_message,
        stack_trace=payload.stack_trace,
    ).unwrap()


@router.post("/{execution_id}/cancel", response_model=ScheduleExecutionHistory)
def cancel_execution(
    execution_id: int,
    service: ExecutionHistoryService = Depends(get_execution_history_service),
) -> ScheduleExecutionHistory:
    return service.cancel_execution(execution_id).unwrap()
