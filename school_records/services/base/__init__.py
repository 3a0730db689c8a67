"""
Base service building blocks.
"""

from school_records.services.base.base_service import BaseService
from school_records.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
]
