"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the school records package
"""

from fastapi import APIRouter

from school_records.api.v1 import bell_schedules, executions, olap

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(bell_schedules.router, tags=["Bell Schedules"])
router.include_router(executions.router, tags=["Schedule Executions"])
router.include_router(olap.router, tags=["Report OLAP"])
