from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from school_records.api.v1.router import router as api_v1_router
from school_records.config.logging import setup_logging
from school_records.config.settings import settings
from school_records.core.error_handling import register_exception_handlers
from school_records.services.bell_schedule_service import BellScheduleService
from school_records.services.execution_history_service import ExecutionHistoryService
from school_records.services.olap_registry_service import OLAPRegistryService


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Attaches fresh in-memory services to app.state.
    - Registers CORS and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        lifespan=lifespan,
    )

    app.state.bell_schedule_service = BellScheduleService()
    app.state.execution_history_service = ExecutionHistoryService()
    app.state.olap_registry_service = OLAPRegistryService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
