from __future__ import annotations

import pytest

from school_records.core.exceptions import (
    ErrorCode as AppErrorCode,
    InvalidStateError,
    OperationError,
    ResourceNotFoundError,
    ValidationError,
)
from school_records.services.base import BaseService, ErrorCode, ServiceError, ServiceResult


def test_success_unwraps_data():
    result = ServiceResult.success(3, message="ok")

    assert result.unwrap() == 3
    assert result.to_dict() == {"success": True, "message": "ok"}


def test_not_found_unwrap_raises_resource_not_found():
    with pytest.raises(ResourceNotFoundError) as exc_info:
        ServiceResult.not_found("Execution", 5).unwrap()

    assert exc_info.value.status_code == 404
    assert exc_info.value.details == {"resource_type": "Execution", "resource_id": "5"}
    assert exc_info.value.message == "Execution not found (ID: 5)"


def test_validation_failure_unwrap_keeps_field_and_details():
    result = ServiceResult.validation_failure("bad limit", field="limit", details={"min": 1})

    with pytest.raises(ValidationError) as exc_info:
        result.unwrap()

    assert exc_info.value.status_code == 422
    assert exc_info.value.details == {"field_errors": {"limit": ["bad limit"]}, "min": 1}


def test_invalid_state_unwrap():
    with pytest.raises(InvalidStateError) as exc_info:
        ServiceResult.invalid_state("already finished", current_state="COMPLETED").unwrap()

    assert exc_info.value.status_code == 409
    assert exc_info.value.details == {"current_state": "COMPLETED"}


def test_failure_to_dict():
    data = ServiceResult.invalid_state("already finished").to_dict()

    assert data["success"] is False
    assert data["error"]["code"] == "INVALID_STATE"


@pytest.mark.parametrize(
    "exception, code",
    [
        (ValueError("bad"), ErrorCode.VALIDATION_ERROR),
        (KeyError("missing"), ErrorCode.NOT_FOUND),
        (RuntimeError("boom"), ErrorCode.INTERNAL_ERROR),
    ],
)
def test_handle_exception_maps_error_codes(exception, code):
    result = BaseService()._handle_exception(exception, "do work", entity_ref=7)

    assert result.is_failure
    assert result.error.code == code
    assert result.error.details["entity_ref"] == "7"
    assert result.error.message == "Failed to do work"


def test_internal_failure_unwraps_to_operation_error():
    result = BaseService()._handle_exception(RuntimeError("boom"), "do work")

    with pytest.raises(OperationError):
        result.unwrap()


def test_ids_are_sequential():
    service = BaseService()

    assert [service._next_id() for _ in range(3)] == [1, 2, 3]


@pytest.mark.parametrize(
    "code, app_code, status_code",
    [
        (ErrorCode.INTERNAL_ERROR, AppErrorCode.OPERATION_FAILED, 500),
        (ErrorCode.VALIDATION_ERROR, AppErrorCode.VALIDATION_ERROR, 422),
        (ErrorCode.NOT_FOUND, AppErrorCode.RESOURCE_NOT_FOUND, 404),
        (ErrorCode.ALREADY_EXISTS, AppErrorCode.DUPLICATE_ENTRY, 409),
        (ErrorCode.INVALID_STATE, AppErrorCode.INVALID_STATE, 409),
    ],
)
def test_service_codes_unwrap_to_app_codes(code, app_code, status_code):
    exception = ServiceError(code=code, message="failed").to_exception()

    assert exception.error_code == app_code
    assert exception.status_code == status_code


def test_app_error_codes_are_all_in_use():
    assert {c.value for c in AppErrorCode} == {
        "INTERNAL_ERROR",
        "RESOURCE_NOT_FOUND",
        "OPERATION_FAILED",
        "VALIDATION_ERROR",
        "INVALID_STATE",
        "DUPLICATE_ENTRY",
    }
