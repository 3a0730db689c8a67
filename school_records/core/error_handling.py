"""
Exception handlers that render package errors as JSON responses.
"""

import logging
import time
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from school_records.core.exceptions import BaseAppException

logger = logging.getLogger(__name__)


async def application_exception_handler(request: Request, exception: BaseAppException) -> JSONResponse:
    """Handle package exceptions raised from endpoints"""
    logger.warning(
        f"Application exception: {exception.error_code.value} - {exception.message}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_response = exception.to_dict()
    error_response["error"]["timestamp"] = int(time.time())
    return JSONResponse(status_code=exception.status_code, content=error_response)


async def validation_exception_handler(request: Request, exception: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors raised while building schemas in endpoints"""
    field_errors: Dict[str, Any] = {}
    for error in exception.errors():
        field_path = '.'.join(str(x) for x in error['loc']) or '__root__'
        field_errors[field_path] = {
            "message": error['msg'],
            "type": error['type']
        }

    logger.warning(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"path": request.url.path, "method": request.method},
    )

    error_response = {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {
                "field_errors": field_errors,
                "error_count": len(field_errors)
            },
            "timestamp": int(time.time())
        }
    }
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, application_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
