"""
In-memory services operating on the transport schemas.
"""

from school_records.services.base import ServiceResult
from school_records.services.bell_schedule_service import BellScheduleService
from school_records.services.execution_history_service import ExecutionHistoryService
from school_records.services.olap_registry_service import OLAPRegistryService

__all__ = [
    "ServiceResult",
    "BellScheduleService",
    "ExecutionHistoryService",
    "OLAPRegistryService",
]
