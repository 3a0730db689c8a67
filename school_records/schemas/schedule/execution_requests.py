# --- File: school_records/schemas/schedule/execution_requests.py ---
"""
Request bodies for recording scheduled report runs.
"""

from typing import Optional

from pydantic import Field

from school_records.schemas.common.base import BaseSchema

__all__ = [
    "ExecutionStartRequest",
    "ExecutionCompleteRequest",
    "ExecutionFailRequest",
]


class ExecutionStartRequest(BaseSchema):
    schedule_id: int = Field(..., ge=1)
    schedule_name: Optional[str] = Field(default=None, max_length=200)
    triggered_by: str = Field(default="MANUAL", pattern=r"^(SCHEDULED|MANUAL|RETRY)$")
    report_format: Optional[str] = Field(default=None, max_length=20)


class ExecutionCompleteRequest(BaseSchema):
    output_file_path: Optional[str] = Field(default=None)
    file_size_bytes: Optional[int] = Field(default=None, ge=0)
    recipient_count: Optional[int] = Field(default=None, ge=0)


class ExecutionFailRequest(BaseSchema):
    error_message: str = Field(..., min_length=1)
    stack_trace: Optional[str] = Field(default=None)
