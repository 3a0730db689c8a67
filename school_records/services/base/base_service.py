"""
Base service class providing common functionality for all services.
"""

import itertools
import threading
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from school_records.config.logging import get_logger
from school_records.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger
    - Consistent error handling via ServiceResult
    - Thread-safe sequential id generation for in-memory stores
    """

    def __init__(self):
        self._logger = get_logger(self.__class__.__module__)
        self._id_lock = threading.Lock()
        self._id_sequence = itertools.count(1)

    def _next_id(self) -> int:
        with self._id_lock:
            return next(self._id_sequence)

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            severity: Error severity level

        Returns:
            ServiceResult with failure status and error details
        """
        error_code = self._map_exception_to_error_code(exception)
        details: Dict[str, Any] = {
            "error": str(exception),
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if error_code == ErrorCode.VALIDATION_ERROR:
            self._logger.warning(f"Validation failed during {operation}: {exception}")
        else:
            self._logger.error(f"Error during {operation}: {exception}", exc_info=True)

        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=f"Failed to {operation}",
                details=details,
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        # pydantic's ValidationError subclasses ValueError
        if isinstance(exception, (PydanticValidationError, ValueError)):
            return ErrorCode.VALIDATION_ERROR
        if isinstance(exception, KeyError):
            return ErrorCode.NOT_FOUND
        return ErrorCode.INTERNAL_ERROR
