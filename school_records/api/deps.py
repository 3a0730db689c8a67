"""
Dependency providers for API routes.

Services live on `app.state` so every application instance created by
`create_app` gets its own in-memory stores.

Example usage in a router:
    @router.get("/schedules")
    def list_schedules(service = Depends(deps.get_bell_schedule_service)):
        ...
"""

from fastapi import Request

from school_records.services.bell_schedule_service import BellScheduleService
from school_records.services.execution_history_service import ExecutionHistoryService
from school_records.services.olap_registry_service import OLAPRegistryService


def get_bell_schedule_service(request: Request) -> BellScheduleService:
    return request.app.state.bell_schedule_service


def get_execution_history_service(request: Request) -> ExecutionHistoryService:
    return request.app.state.execution_history_service


def get_olap_registry_service(request: Request) -> OLAPRegistryService:
    return request.app.state.olap_registry_service
