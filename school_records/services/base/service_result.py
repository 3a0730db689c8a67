"""
Service result patterns for standardized response handling.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass
from enum import Enum
from datetime import datetime, timezone

from school_records.core.exceptions import (
    BaseAppException,
    ErrorCode as AppErrorCode,
    InvalidStateError,
    OperationError,
    ResourceNotFoundError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_STATE = "INVALID_STATE"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
            "field": self.field,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    def to_exception(self) -> BaseAppException:
        """Translate the error into the matching package exception."""
        details = self.details or {}
        if self.code == ErrorCode.NOT_FOUND:
            return ResourceNotFoundError(
                resource_type=details.get("resource_type", "Resource"),
                resource_id=details.get("resource_id"),
                message=self.message,
            )
        if self.code == ErrorCode.VALIDATION_ERROR:
            field_errors = {self.field: [self.message]} if self.field else None
            error = ValidationError(self.message, field_errors=field_errors)
            error.details.update(details)
            return error
        if self.code == ErrorCode.INVALID_STATE:
            return InvalidStateError(self.message, current_state=details.get("current_state"))
        if self.code == ErrorCode.ALREADY_EXISTS:
            return OperationError(self.message, AppErrorCode.DUPLICATE_ENTRY, details, 409)
        return OperationError(self.message, details=details)


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Additional context information
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(
            is_success=True,
            data=data,
            message=message,
            metadata=metadata or {},
        )

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(
            is_success=False,
            error=error,
            message=error.message,
            metadata=metadata or {},
        )

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a validation failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message=message,
                field=field,
                details=details,
            )
        )

    @classmethod
    def not_found(
        cls,
        resource_type: str,
        resource_id: Optional[Any] = None,
    ) -> "ServiceResult[TData]":
        """Create a not found failure result."""
        message = f"{resource_type} not found"
        if resource_id is not None:
            message += f" (ID: {resource_id})"

        return cls.failure(
            ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=message,
                severity=ErrorSeverity.WARNING,
                details={
                    "resource_type": resource_type,
                    "resource_id": None if resource_id is None else str(resource_id),
                },
            )
        )

    @classmethod
    def invalid_state(
        cls,
        message: str,
        current_state: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Create an invalid state failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.INVALID_STATE,
                message=message,
                details={"current_state": current_state},
            )
        )

    @property
    def is_failure(self) -> bool:
        """Check if result represents failure."""
        return not self.is_success

    def unwrap(self) -> TData:
        """Return the data or raise the exception matching the error."""
        if self.is_success:
            return self.data
        raise self.error.to_exception()

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        result: Dict[str, Any] = {"success": self.is_success}
        if self.message:
            result["message"] = self.message
        if self.error:
            result["error"] = self.error.to_dict()
        if self.metadata:
            result["metadata"] = self.metadata
        return result
